"""Prompt templates using Jinja2."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from pr_reviewer.services.reviewer.schemas import DiffChunk, DiffFile, PullRequestContext

PROMPTS_DIR = Path(__file__).parent
_env = Environment(
    loader=FileSystemLoader(PROMPTS_DIR),
    keep_trailing_newline=True,
    undefined=StrictUndefined,
)

PROMPT_TEMPLATES = {
    "standard": "code_review.jinja2",
    "senior": "senior_review.jinja2",
}


def number_chunk_lines(chunk: DiffChunk) -> str:
    """Re-list each hunk line as ``"<line number> <content>"``.

    The new-file number is used when the line has one, the old-file number
    otherwise, so the model can answer with a number we can resolve.
    """
    return "\n".join(f"{line.display_line_number} {line.content}" for line in chunk.lines)


def render_review_prompt(
    file: DiffFile,
    chunk: DiffChunk,
    pr: PullRequestContext,
    variant: str = "standard",
) -> str:
    """Render the review prompt for one hunk of one file."""
    try:
        template_name = PROMPT_TEMPLATES[variant]
    except KeyError:
        raise ValueError(f"Unknown prompt variant: {variant}") from None

    template = _env.get_template(template_name)
    return template.render(
        file_path=file.path,
        pr_title=pr.title,
        pr_description=pr.description,
        chunk_header=chunk.content,
        numbered_lines=number_chunk_lines(chunk),
    )

"""Template rendering — ``{{name}}`` substitution with an explicit missing-variable policy."""

import re
from dataclasses import asdict, dataclass
from enum import Enum

import structlog
from courier.errors import MissingTemplateVariableError

logger = structlog.get_logger(__name__)

PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


class MissingVariablePolicy(Enum):
    BLANK = "blank"  # Render as empty string and log a warning
    RAISE = "raise"  # Raise MissingTemplateVariableError


@dataclass(frozen=True)
class RenderedContent:
    title: str
    body: str
    deep_link: str | None = None

    def to_dict(self):
        return asdict(self)


def placeholders(text: str) -> list[str]:
    """Variable names referenced by ``text`` in order of appearance."""
    return PLACEHOLDER.findall(text or "")


def _substitute(text, variables):
    missing = []

    def _replace(match):
        name = match.group(1)
        if name not in variables:
            missing.append(name)
            return ""
        value = variables[name]
        return "" if value is None else str(value)

    return PLACEHOLDER.sub(_replace, text or ""), missing


def render_text(text: str, variables: dict, policy=MissingVariablePolicy.BLANK) -> str:
    """Replace every placeholder in ``text``.

    Values are rendered with ``str``; ``None`` renders as an empty string.
    """
    rendered, missing = _substitute(text, variables or {})
    if missing and MissingVariablePolicy(policy) == MissingVariablePolicy.RAISE:
        raise MissingTemplateVariableError(missing)
    return rendered


class Renderer:
    """Renders a template's per-channel content. Touches no storage or transport."""

    def __init__(self, policy=MissingVariablePolicy.BLANK):
        self.policy = MissingVariablePolicy(policy)

    def render(self, template, variables: dict, channel: str | None = None) -> RenderedContent:
        """Render ``channel``'s content, falling back to the primary content."""
        content = (channel and template.content_for(channel)) or template.primary_content()
        variables = variables or {}

        title, missing_title = _substitute(content.title, variables)
        body, missing_body = _substitute(content.body, variables)
        deep_link = None
        missing_link = []
        if content.deep_link:
            deep_link, missing_link = _substitute(content.deep_link, variables)

        missing = missing_title + missing_body + missing_link
        if missing:
            if self.policy == MissingVariablePolicy.RAISE:
                raise MissingTemplateVariableError(missing)
            logger.warning(
                "template_variables_missing",
                template_id=template.id,
                channel=channel,
                variables=sorted(set(missing)),
            )

        return RenderedContent(title=title, body=body, deep_link=deep_link)

    def render_primary(self, template, variables: dict) -> RenderedContent:
        """Content stored on the record as its title and message."""
        return self.render(template, variables)

"""Factory for creating Jinja2Templates with shared globals."""

import pathlib
import typing

import fastapi.templating


def make_templates(
    directory: pathlib.Path | str,
    **extra_globals: typing.Any,
) -> fastapi.templating.Jinja2Templates:
    """Create a Jinja2Templates instance for ``directory``.

    Keyword arguments are added as template globals (helpers such as
    display formatters).
    """
    templates = fastapi.templating.Jinja2Templates(directory=str(directory))
    templates.env.globals.update(extra_globals)  # type: ignore[reportUnknownMemberType]
    return templates

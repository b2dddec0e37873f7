"""URL and query-string templating.

Path templates carry ``{name}`` placeholders for path parameters. Query
templates are not declared as parameters; they live in an operation's free
text ``notes``, as the first whitespace-delimited word starting with ``?``
(for example ``?limit={limit}&offset={offset}``).
"""

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any

from apidisco.discovery.models import Parameter
from apidisco.utils import format_value

logger = logging.getLogger(__name__)

QUERY_TEMPLATE_RE = re.compile(r'\?\S+')
UNFILLED_FRAGMENT_RE = re.compile(r'&?[A-Za-z_][\w.\-\[\]]*=\{[^}]+\}')


def render_path(
    template: str, path_params: Sequence[Parameter], path_args: Sequence[Any]
) -> str:
    """Substitute path placeholders, pairing parameters and values by position."""
    path = template
    for param, value in zip(path_params, path_args):
        path = path.replace(f'{{{param.name}}}', format_value(value))
    return path


def extract_query_template(notes: str | None) -> str | None:
    """Return the ``?...`` query template found in ``notes``, if any."""
    match = QUERY_TEMPLATE_RE.search(notes or '')
    return match.group(0) if match else None


def strip_unfilled(query_string: str) -> str:
    """Remove ``key={placeholder}`` fragments left unfilled, with their connectors."""
    query_string = UNFILLED_FRAGMENT_RE.sub('', query_string)
    query_string = re.sub(r'\?&+', '?', query_string)
    query_string = re.sub(r'&{2,}', '&', query_string).rstrip('&')
    return '' if query_string == '?' else query_string


def render_query(query: Mapping[str, Any] | None, notes: str | None) -> str:
    """Build the query string for a call.

    Returns an empty string when no query mapping was supplied, or when the
    operation's notes declare no query template.
    """
    if query is None:
        return ''

    template = extract_query_template(notes)
    if template is None:
        if query:
            logger.warning(
                f'Query arguments {sorted(query)} ignored: operation declares no query template'
            )
        return ''

    query_string = template
    for key, value in query.items():
        query_string = query_string.replace(f'{{{key}}}', format_value(value))
    return strip_unfilled(query_string)


def build_url(api_base: str, path: str, query_string: str = '') -> str:
    return f'{api_base}{path}{query_string}'

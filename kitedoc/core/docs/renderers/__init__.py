"""Output format renderers.

Each renderer consumes the same classified model and returns a
:class:`~kitedoc.core.docs.document.DocumentTree`; none of them touch the
filesystem.
"""

from kitedoc.core.docs.renderers.markdown import MarkdownRenderer
from kitedoc.core.docs.renderers.schema import SchemaRenderer, schema_source
from kitedoc.core.docs.renderers.seo import SiteLayout
from kitedoc.core.docs.renderers.site import SiteRenderer

__all__ = [
    "MarkdownRenderer",
    "SchemaRenderer",
    "SiteLayout",
    "SiteRenderer",
    "schema_source",
]

"""
Rendu des documents XML/XHTML à partir des templates Jinja2 du package.
"""

from functools import lru_cache

from jinja2 import Environment, PackageLoader, select_autoescape


@lru_cache(maxsize=1)
def _template_env() -> Environment:
    return Environment(
        loader=PackageLoader("epub_assembler", "templates"),
        autoescape=select_autoescape(
            enabled_extensions=("xml", "xhtml", "opf", "ncx"),
            default_for_string=False,
        ),
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render_template(template_name: str, **context: object) -> str:
    """Rend un template (valeurs échappées, sauf filtre |safe)."""
    return _template_env().get_template(template_name).render(**context)

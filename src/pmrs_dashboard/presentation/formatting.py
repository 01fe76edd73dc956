"""String helpers shared between the API layer and the browser UI.

``base_path`` decides where ``main.create_app`` mounts the API routes.
``PANEL_CLASS`` and ``pad_start_nbsp`` have no server-side caller. They are
exported for the dashboard UI build, which renders service tables with them,
so both sides keep one definition.
"""

PANEL_CLASS = "rounded-md ring-1 ring-zinc-200 dark:ring-zinc-700 w-fit p-1 bg-zinc-100 dark:bg-zinc-800"

_NBSP = "&nbsp;"


def pad_start_nbsp(text: str, target_length: int) -> str:
    """Left-pad ``text`` with ``&nbsp;`` entities up to ``target_length`` characters.

    Longer input is returned unchanged.
    """
    return _NBSP * max(0, target_length - len(text)) + text


def base_path(production: bool) -> str:
    """URL prefix the dashboard is served under."""
    return "/admin/" if production else "/"

import logging
import webbrowser

log = logging.getLogger(__name__)


def open_external(url: str) -> None:
    """Opens `url` in the user's browser. Failures are logged, never raised."""
    try:
        if not webbrowser.open(url):
            log.warning(f"No browser available to open {url}")
    except webbrowser.Error as e:
        log.warning(f"Failed to open {url}: {e}")

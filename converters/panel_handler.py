"""Panel handler for Confluence info/warning/note callout containers."""

import logging
from typing import Any

from .node_kinds import class_string
from .text_normalizer import clean_text

logger = logging.getLogger('confluence_html2md.converters.panelhandler')


class PanelHandler:
    """Derives labels for Confluence panel macros rendered as blockquote callouts."""

    TITLE_SELECTOR = '.panelHeader, .panel-heading, .title'

    # Checked in order, first match wins
    CLASS_LABELS = (
        ('info', 'Info'),
        ('warning', 'Warning'),
        ('note', 'Note'),
    )

    DEFAULT_LABEL = 'Note'

    def __init__(self, logger: logging.Logger = None):
        """Initialize panel handler with optional logger."""
        self.logger = logger or logging.getLogger('confluence_html2md.converters.panelhandler')

    def extract_title(self, element: Any) -> str:
        """
        Extract the callout label for a panel container.

        An explicit header element (panelHeader, panel-heading, title) wins.
        Otherwise the label is derived from the container's class markers,
        defaulting to "Note".

        Args:
            element: Panel container Tag

        Returns:
            Label text for the callout
        """
        header = element.select_one(self.TITLE_SELECTOR)
        if header is not None:
            title = clean_text(header.get_text())
            if title:
                self.logger.debug(f"Panel title from header element: {title}")
                return title

        classes = class_string(element)
        for marker, label in self.CLASS_LABELS:
            if marker in classes:
                return label

        return self.DEFAULT_LABEL


__all__ = ['PanelHandler']

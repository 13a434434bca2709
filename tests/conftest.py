"""Shared fixtures for converter and pipeline tests."""

import logging

import pytest
from bs4 import BeautifulSoup


@pytest.fixture
def logger():
    return logging.getLogger('confluence_html2md.tests')


@pytest.fixture
def parse():
    """Parse an HTML fragment and return the first element of its body."""
    def _parse(html):
        soup = BeautifulSoup(html, 'lxml')
        return next(child for child in soup.body.children if child.name)
    return _parse


@pytest.fixture
def page(tmp_path):
    """Write an HTML page below tmp_path and return its path."""
    def _page(relative, html):
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(html, encoding='utf-8')
        return path
    return _page


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo setup_logging() so caplog keeps seeing package records."""
    yield
    package_logger = logging.getLogger('confluence_html2md')
    for handler in list(package_logger.handlers):
        handler.close()
    package_logger.handlers.clear()
    package_logger.propagate = True
    package_logger.setLevel(logging.NOTSET)

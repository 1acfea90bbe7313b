"""Shared test fixtures for less-census tests."""

import os

import pytest

from less_census.scanning.classifier import Classifier
from less_census.syntax.parser import LessParser

BUTTONS_LESS = """\
// Buttons
@primary: #FF0000;

.button {
  color: @primary;
  width: 10px;
  z-index: 10;

  &:hover {
    color: darken(@primary, 10%);
  }
}
"""

LAYOUT_LESS = """\
@media screen and (min-width: 768px) {
  .container {
    margin: 0 auto;
    font: 12px/1.5 "Helvetica Neue", sans-serif;
  }
}

@font-face {
  font-family: Icons;
  src: url(fonts/icons.woff);
}
"""

MIXINS_LESS = """\
.rounded(@radius: 4px) {
  border-radius: @radius;
}

.m(@a; @b) when (@a + @b > 10) {
  width: 1px;
}

.box {
  .rounded(2px);
  background: #fff;
  color: red;
}
"""

BROKEN_LESS = """\
.oops {
  color: red;
"""


@pytest.fixture
def parser():
    return LessParser()


@pytest.fixture
def classify():
    """Parse and classify LESS source, returning the populated counter store."""

    def _classify(*sources, scan_statements=False):
        classifier = Classifier(scan_statements=scan_statements)
        for source in sources:
            classifier.scan(LessParser().parse(source))
        return classifier.store

    return _classify


@pytest.fixture
def write_less(tmp_path):
    """Write LESS source to a file under tmp_path and return its path."""

    def _write(name, source):
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(source, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def corpus(write_less):
    """Three well-formed stylesheets."""
    return [
        write_less("buttons.less", BUTTONS_LESS),
        write_less("layout.less", LAYOUT_LESS),
        write_less("mixins.less", MIXINS_LESS),
    ]


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Keep user and project config files and LESS_CENSUS_* variables out of tests."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)

    for key in list(os.environ):
        if key.startswith("LESS_CENSUS_"):
            monkeypatch.delenv(key)
    return tmp_path


@pytest.fixture
def sources():
    """The sample stylesheets by name."""
    return {
        "buttons": BUTTONS_LESS,
        "layout": LAYOUT_LESS,
        "mixins": MIXINS_LESS,
        "broken": BROKEN_LESS,
    }

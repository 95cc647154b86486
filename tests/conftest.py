"""
Pytest configuration and fixtures.
"""

import logging

import pytest

from utils.logger import LOGGER_NAME


@pytest.fixture(autouse=True)
def reset_log_levels():
    """Undo quiet/debug mode changes made by CLI tests."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.INFO)
    for handler in logger.handlers:
        handler.setLevel(logging.INFO)


@pytest.fixture
def release_root(tmp_path):
    """Directory holding a movie, a TV show and an unparsable folder."""
    movie = tmp_path / "Brave.2012.R5.DVDRip.XViD.LiNE-UNiQUE"
    movie.mkdir()
    (movie / "unique-brave.avi").write_bytes(b"")
    (movie / "unique-brave-sample.avi").write_bytes(b"")
    (movie / "unique-brave.nfo").write_text("nfo")

    (tmp_path / "Winx.Club.S06E16.Die.Zombie-Invasion.GERMAN.DUBBED.DL.720p.WEB-DL.h264-pbw").mkdir()
    (tmp_path / "xyz").mkdir()
    (tmp_path / "notes.txt").write_text("not a release")
    return tmp_path

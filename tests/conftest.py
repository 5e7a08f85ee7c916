import pytest
from pathlib import Path

from starscope.scope import RootScope


@pytest.fixture
def root():
    return RootScope()


@pytest.fixture
def project(tmp_path):
    """Write a `starscope.conf.yml` into a fresh project directory.

    Returns
    -------
        A function taking the configuration text and returning the project path.
    """
    def _project(conf_text: str) -> Path:
        tmp_path.joinpath('starscope.conf.yml').write_text(conf_text)
        return tmp_path

    return _project

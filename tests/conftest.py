"""Shared fixtures for the test suite."""

import pytest

from services import BlobStorage, LocalBlobStorage, StorageError


SCENARIO_CSV = (
    "sentence,abbreviation,long_form,domain,completed\n"
    "The WHO issued guidance.,WHO,World Health Organization,Medical,false\n"
    "NASA launched a probe.,NASA,National Aeronautics and Space Administration,Science,Y\n"
    "The CEO resigned.,CEO,,Business,\n"
    "GDP grew by 2%.,GDP,Gross Domestic Product,Economics,no\n"
)


class FailingStorage(BlobStorage):
    """Storage whose every call fails like an unreachable bucket."""

    def __init__(self, message: str = "bucket unavailable"):
        self.message = message

    def list(self, prefix="", limit=1000):
        raise StorageError(self.message)

    def upload(self, name, content, overwrite=True):
        raise StorageError(self.message)

    def download(self, name):
        raise StorageError(self.message)

    def delete(self, names):
        raise StorageError(self.message)


@pytest.fixture
def storage(tmp_path):
    """Empty directory-backed storage."""
    return LocalBlobStorage(tmp_path / "bucket")


@pytest.fixture
def failing_storage():
    return FailingStorage()


@pytest.fixture
def scenario_csv():
    """Four rows, one of them completed with a 'Y' flag."""
    return SCENARIO_CSV

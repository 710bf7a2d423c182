"""Shared fixtures for the VCF Manager test suite."""

from typing import List

import pytest

from vcf_manager.config import AppConfig
from vcf_manager.contacts import ContactCollection
from vcf_manager.dedupe import MergeDecision, MergeEngine
from vcf_manager.models import Contact, DuplicateGroup, PendingMerge


@pytest.fixture
def config(tmp_path):
    return AppConfig(log_dir=tmp_path / "logs")


@pytest.fixture
def collection():
    return ContactCollection()


@pytest.fixture
def engine(collection, config):
    return MergeEngine(collection, config.default_country_code)


@pytest.fixture
def make_contact():
    def _make(full_name="Ana", **kwargs) -> Contact:
        return Contact(full_name=full_name, **kwargs)
    return _make


class ScriptedPresenter:
    """Presenter that answers from a script instead of a terminal."""

    def __init__(self, accept_preview=True, decisions=None, on_pending=None):
        self.accept_preview = accept_preview
        self.decisions = list(decisions or [])
        self.on_pending = on_pending
        self.previews: List[List[DuplicateGroup]] = []
        self.presented: List[PendingMerge] = []

    async def present_duplicate_preview(self, groups, mode):
        self.previews.append(groups)
        return self.accept_preview

    async def present_pending_merge(self, pending):
        self.presented.append(pending)
        if self.on_pending is not None:
            self.on_pending(pending)
        return self.decisions.pop(0) if self.decisions else MergeDecision.COMMIT


@pytest.fixture
def presenter_factory():
    return ScriptedPresenter

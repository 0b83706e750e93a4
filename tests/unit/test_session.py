"""Tests for SymbolicationSession."""

import pytest

from conftest import CRASHY_UUID, KIT_UUID, FakeResolver

from symbo.errors import ReportError, ReportReadError
from symbo.search.engine import DSYMSearch
from symbo.search.results import SearchResult
from symbo.search.strategies import SearchStrategy
from symbo.session import SymbolicationSession


class FoundStrategy(SearchStrategy):
    name = "found"

    def __init__(self, results):
        self.results = results
        self.seen = []

    def run(self, uuids, report_directory, log_handler):
        self.seen.append((list(uuids), report_directory))
        return self.results


@pytest.fixture
def report_path(tmp_path, sample_report_text):
    path = tmp_path / "reports" / "Crashy.crash"
    path.parent.mkdir()
    path.write_text(sample_report_text)
    return path


@pytest.fixture
def session(fake_dumper):
    return SymbolicationSession(uuid_dumper=fake_dumper, resolver=FakeResolver(default="symbol"))


def test_status_text_before_loading(session):
    assert session.expected_uuids == set()
    assert session.dsym_status_text() == "(if not found automatically)"


def test_load_report_and_status(session, report_path):
    session.load_report(report_path)

    assert session.expected_uuids == {CRASHY_UUID, KIT_UUID}
    assert session.remaining_uuids == {CRASHY_UUID, KIT_UUID}
    assert session.report_status_text() == "(2 dSYMs needed)"
    assert session.dsym_status_text() == "Found 0/2"


def test_load_report_from_text(session, sample_report_text):
    report = session.load_report(sample_report_text)
    assert report.path is None
    assert len(report.processes) == 1


def test_load_report_failure_is_logged(session, tmp_path):
    with pytest.raises(ReportReadError):
        session.load_report(tmp_path / "missing.crash")
    assert session.report is None
    assert session.log_sink.messages[0].startswith("Error loading report file:")


def test_add_dsyms_deduplicates(session, report_path, crashy_dsym, kit_dsym):
    session.load_report(report_path)

    assert len(session.add_dsyms([crashy_dsym, crashy_dsym])) == 1
    assert session.add_dsyms([str(crashy_dsym)]) == []
    assert session.found_uuids == {CRASHY_UUID}
    assert session.remaining_uuids == {KIT_UUID}
    assert session.dsym_status_text() == "Found 1/2"

    session.add_dsyms([kit_dsym])
    assert session.remaining_uuids == set()


def test_search_only_looks_for_remaining(session, report_path, crashy_dsym, kit_dsym):
    session.load_report(report_path)
    session.add_dsyms([crashy_dsym])

    strategy = FoundStrategy([SearchResult(str(kit_dsym), KIT_UUID)])
    outcome = session.search_for_dsyms(DSYMSearch([strategy], timeout=5))

    assert outcome.succeeded
    assert strategy.seen == [([KIT_UUID], report_path.parent)]
    assert session.remaining_uuids == set()
    assert session.searching is False


def test_search_skipped_when_nothing_missing(session, report_path, crashy_dsym, kit_dsym):
    session.load_report(report_path)
    session.add_dsyms([crashy_dsym, kit_dsym])

    strategy = FoundStrategy([])
    assert session.search_for_dsyms(DSYMSearch([strategy], timeout=5)) == (True, [])
    assert strategy.seen == []


def test_symbolicate(session, report_path, crashy_dsym, kit_dsym):
    session.load_report(report_path)
    session.add_dsyms([crashy_dsym, kit_dsym])

    outcome = session.symbolicate()

    assert outcome.success is True
    assert outcome.content.count(">>>> ") == 3
    assert outcome.save_path == report_path.parent / "[S] Crashy.txt"
    assert any(m.startswith("Missing dSYM for binary: libdyld.dylib") for m in outcome.logs)


def test_symbolicate_without_report(session):
    with pytest.raises(ReportError):
        session.symbolicate()

"""Tests for the rich terminal presenter, with prompts answered from a script."""

import io

import pytest
from rich.console import Console
from rich.prompt import Confirm, Prompt

from vcf_manager.cli import RichMergePresenter, contacts_table, duplicate_groups_table
from vcf_manager.cli.views import draft_table, sources_table
from vcf_manager.dedupe import MergeDecision, MergeSession
from vcf_manager.models import Contact


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120)


@pytest.fixture
def answers(monkeypatch):
    """Queue of answers returned by Prompt.ask, in order."""
    queue = []
    monkeypatch.setattr(Prompt, "ask", lambda *args, **kwargs: queue.pop(0))
    monkeypatch.setattr(Confirm, "ask", lambda *args, **kwargs: queue.pop(0))
    return queue


@pytest.fixture
def presenter(collection, engine, config, console):
    return RichMergePresenter(collection, engine, config, console)


@pytest.fixture
def pair(collection):
    a = Contact(full_name="Ana", phones=["612345678"])
    b = Contact(full_name="Ana López", emails=["ana@example.com"], title="CTO")
    collection.load([a, b])
    return a, b


class TestPendingMerge:

    async def test_commit(self, presenter, engine, pair, answers):
        a, b = pair
        answers.append("c")
        pending = engine.begin([a.id, b.id])
        assert await presenter.present_pending_merge(pending) is MergeDecision.COMMIT

    async def test_abort(self, presenter, engine, pair, answers):
        a, b = pair
        answers.append("x")
        pending = engine.begin([a.id, b.id])
        assert await presenter.present_pending_merge(pending) is MergeDecision.ABORT

    async def test_switch_master(self, presenter, engine, pair, answers):
        a, b = pair
        answers.extend(["m 2", "c"])
        await presenter.present_pending_merge(engine.begin([a.id, b.id]))
        assert engine.pending.master_id == b.id

    async def test_edit_add_and_remove(self, presenter, engine, pair, answers):
        a, b = pair
        answers.extend([
            "e note", "Met in Madrid",
            "a phones", "699 000 111",
            "r emails 0",
            "c",
        ])
        await presenter.present_pending_merge(engine.begin([a.id, b.id]))

        draft = engine.pending.draft
        assert draft.note == "Met in Madrid"
        assert draft.phones == ["+34612345678", "+34699000111"]
        assert draft.emails == []

    async def test_bad_commands_do_not_end_the_merge(self, presenter, engine, pair, answers, console):
        a, b = pair
        answers.extend(["m 9", "e shoe_size", "r phones 7", "zzz", "x"])
        decision = await presenter.present_pending_merge(engine.begin([a.id, b.id]))

        assert decision is MergeDecision.ABORT
        output = console.file.getvalue()
        assert "No source number 9" in output
        assert "Unknown field 'shoe_size'" in output
        assert "Unknown command 'zzz'" in output

    async def test_bracketed_text_is_printed_literally(self, presenter, engine, collection, answers, console):
        a = Contact(full_name="Ana [/work]", note="[bold]call later")
        b = Contact(full_name="Ana [home]", phones=["612345678"])
        collection.load([a, b])
        answers.extend(["e [/x]", "x"])

        await presenter.present_pending_merge(engine.begin([a.id, b.id]))

        output = console.file.getvalue()
        assert "Unknown field '[/x]'" in output
        assert "Ana [/work]" in output
        assert "Ana [home]" in output
        assert "[bold]call later" in output


class TestDuplicatePreview:

    async def test_accept(self, presenter, pair, answers):
        a, b = pair
        answers.append(True)
        assert await presenter.present_duplicate_preview([[a.id, b.id]], "name") is True

    async def test_decline(self, presenter, pair, answers):
        a, b = pair
        answers.append(False)
        assert await presenter.present_duplicate_preview([[a.id, b.id]], "name") is False


class TestSessionWithRichPresenter:

    async def test_auto_merge_by_phone(self, collection, engine, config, presenter, answers):
        collection.load([
            Contact(full_name="Ana", phones=["612 345 678"]),
            Contact(full_name="Ana Work", phones=["0034612345678"]),
            Contact(full_name="Luis", phones=["699000111"]),
        ])
        answers.extend([True, "c"])

        session = MergeSession(collection, presenter, config, engine=engine)
        result = await session.auto_merge("phone")

        assert result.merged == 1
        assert [c.full_name for c in collection] == ["Ana Work", "Luis"]


class TestViews:

    def test_contacts_table_rows(self, config, console):
        contacts = [Contact(full_name="Ana", phones=["1", "2", "3", "4", "5"]), Contact(full_name="Luis")]
        table = contacts_table(contacts, config, selected=[contacts[1].id])

        assert table.row_count == 2
        console.print(table)
        assert "+2 more" in console.file.getvalue()

    def test_duplicate_groups_summary(self, collection, console):
        a, b, c = Contact(full_name="A"), Contact(full_name="A"), Contact(full_name="B")
        collection.load([a, b, c])

        console.print(duplicate_groups_table([[a.id, b.id]], collection, "name"))
        assert "1 group, 2 contacts" in console.file.getvalue()

    def test_contacts_table_keeps_brackets(self, config, console):
        contacts = [Contact(full_name="Ana [/work]", organization="[b]ACME", emails=["[x]@example.com"])]
        console.print(contacts_table(contacts, config))

        output = console.file.getvalue()
        assert "Ana [/work]" in output
        assert "[b]ACME" in output
        assert "[x]@example.com" in output

    def test_duplicate_groups_keep_brackets(self, collection, console):
        a, b = Contact(full_name="[red]Ana"), Contact(full_name="[red]Ana")
        collection.load([a, b])

        console.print(duplicate_groups_table([[a.id, b.id]], collection, "name"))
        assert "[red]Ana" in console.file.getvalue()

    def test_merge_tables_keep_brackets(self, engine, collection, config, console):
        a = Contact(full_name="Ana [/]", emails=["ana@example.com"], title="[i]CTO")
        b = Contact(full_name="Ana", phones=["612345678"])
        collection.load([a, b])
        pending = engine.begin([a.id, b.id])

        console.print(sources_table(pending, config))
        console.print(draft_table(pending, config))

        output = console.file.getvalue()
        assert "Ana [/]" in output
        assert "[0] ana@example.com" in output
        assert "[i]CTO" in output

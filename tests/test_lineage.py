from core.history import HistoryStack
from core.lineage import lineage, version_pair
from core.models import EditorFile

from conftest import make_snapshot, make_window


def test_unchanged_push_does_not_add_a_version():
    history = HistoryStack(make_snapshot("A"))
    history.push(make_snapshot("A", name="renamed.lua"))
    history.push(make_snapshot("B"))

    records = lineage(history, "1")
    assert len(records) == 2
    assert records[0].is_latest
    assert not records[1].is_latest
    assert records[0].file.data.title == "B"
    assert records[1].file.data.title == "A"
    assert records[1].ordinal == 0
    assert records[0].ordinal == 2


def test_unknown_file_gives_empty_lineage():
    history = HistoryStack(make_snapshot("A"))
    assert lineage(history, "missing") == []


def test_snapshots_without_the_file_contribute_nothing():
    other = EditorFile(id="2", name="other.lua", data=make_window("O"))
    history = HistoryStack(make_snapshot("A"))
    history.push((other,))
    history.push(make_snapshot("A") + (other,))
    records = lineage(history, "1")
    assert len(records) == 1
    assert records[0].is_latest
    assert lineage(history, "2")[0].ordinal == 1


def test_return_to_earlier_state_is_a_new_version():
    history = HistoryStack(make_snapshot("A"))
    history.push(make_snapshot("B"))
    history.push(make_snapshot("A"))
    assert [r.file.data.title for r in lineage(history, "1")] == ["A", "B", "A"]


def test_latest_marks_newest_retained_even_after_undo():
    history = HistoryStack(make_snapshot("A"))
    history.push(make_snapshot("B"))
    history.push(make_snapshot("B"))
    history.undo()
    records = lineage(history, "1")
    assert len(records) == 2
    assert records[0].is_latest and records[0].file.data.title == "B"


def test_lineage_does_not_mutate_history():
    history = HistoryStack(make_snapshot("A"))
    history.push(make_snapshot("B"))
    before = (history.snapshots, history.pointer)
    lineage(history, "1")
    assert (history.snapshots, history.pointer) == before


def test_version_pair():
    history = HistoryStack(make_snapshot("A"))
    history.push(make_snapshot("B"))
    records = lineage(history, "1")
    selected, previous = version_pair(records, 0)
    assert (selected.file.data.title, previous.file.data.title) == ("B", "A")
    selected, previous = version_pair(records, 1)
    assert selected is previous


def test_record_timestamps_match_their_snapshot():
    history = HistoryStack(make_snapshot("A"), capacity=2)
    history.push(make_snapshot("B"))
    history.push(make_snapshot("C"))
    timestamps = history.timestamps
    for record in lineage(history, "1"):
        assert record.timestamp == timestamps[record.ordinal]

import threading
from pathlib import Path

from mdhtml.history import CSV_HEADER, HistoryEntry, HistoryLog


def make_entry(index: int) -> HistoryEntry:
    return HistoryEntry(
        tool_id="markdown-converter",
        input=f"in{index}",
        output=f"<p>in{index}</p>",
        options={"mode": "markdown-to-html"},
        elapsed_ms=1.5,
    )


def test_history_is_capped_and_newest_first(tmp_path: Path) -> None:
    log = HistoryLog(tmp_path / "history.jsonl", max_entries=3)
    for index in range(5):
        log.append(make_entry(index))
    entries = log.entries()
    assert [entry.input for entry in entries] == ["in4", "in3", "in2"]
    assert [entry.input for entry in log.entries(limit=2)] == ["in4", "in3"]
    assert len(log.path.read_text(encoding="utf-8").splitlines()) == 3


def test_history_skips_corrupt_lines(tmp_path: Path) -> None:
    log = HistoryLog(tmp_path / "history.jsonl")
    log.append(make_entry(1))
    with log.path.open("a", encoding="utf-8") as handle:
        handle.write("not json\n")
    entries = log.entries()
    assert len(entries) == 1
    assert entries[0].options == {"mode": "markdown-to-html"}
    assert entries[0].entry_id.startswith("conv-")


def test_history_clear(tmp_path: Path) -> None:
    log = HistoryLog(tmp_path / "nested" / "history.jsonl")
    log.append(make_entry(1))
    assert log.path.exists()
    log.clear()
    assert not log.path.exists()
    assert log.entries() == []
    log.clear()


def test_history_export_csv(tmp_path: Path) -> None:
    log = HistoryLog(tmp_path / "history.jsonl")
    log.append(make_entry(1))
    log.append(make_entry(2))
    target = tmp_path / "export.csv"
    assert log.export_csv(target) == 2
    lines = target.read_text(encoding="utf-8").splitlines()
    assert lines[0] == ",".join(CSV_HEADER)
    assert len(lines) == 3
    assert ",markdown-to-html,3,10,1.50" in lines[1]


def test_concurrent_appends_keep_every_entry(tmp_path: Path) -> None:
    log = HistoryLog(tmp_path / "history.jsonl", max_entries=500)

    def worker(offset: int) -> None:
        for index in range(10):
            log.append(make_entry(offset * 10 + index))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(16)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    entries = log.entries()
    assert len(entries) == 160
    assert len({entry.entry_id for entry in entries}) == 160

from audit_gate.infra.line_stream import LineStream


def test_iterates_lines_in_order(tmp_path):
    path = tmp_path / "out.jsonl"
    path.write_text('{"a": 1}\n{"b": 2}\r\n\nlast', encoding="utf-8")

    assert list(LineStream(path)) == ['{"a": 1}', '{"b": 2}', "", "last"]


def test_is_reiterable(tmp_path):
    path = tmp_path / "out.jsonl"
    path.write_text("one\ntwo\n", encoding="utf-8")
    stream = LineStream(path)

    assert list(stream) == list(stream) == ["one", "two"]


def test_for_each_line_calls_action_and_counts(tmp_path):
    path = tmp_path / "out.jsonl"
    path.write_text("x\ny\nz\n", encoding="utf-8")
    seen = []

    count = LineStream(path).for_each_line(seen.append)

    assert seen == ["x", "y", "z"]
    assert count == 3


def test_invalid_utf8_is_replaced(tmp_path):
    path = tmp_path / "out.jsonl"
    path.write_bytes(b"ok\n\xff\xfebad\n")

    lines = list(LineStream(path))

    assert lines[0] == "ok"
    assert lines[1].endswith("bad")


def test_early_stop_closes_file(tmp_path):
    path = tmp_path / "out.jsonl"
    path.write_text("a\nb\nc\n", encoding="utf-8")

    it = iter(LineStream(path))
    assert next(it) == "a"
    it.close()

    # file can be replaced once the reader is closed
    path.write_text("d\n", encoding="utf-8")
    assert list(LineStream(path)) == ["d"]


def test_empty_file(tmp_path):
    path = tmp_path / "empty.jsonl"
    path.write_bytes(b"")

    assert list(LineStream(path)) == []

from respool.utils import (
    close_logging,
    init_logging,
    log,
    logDebug,
    logError,
    logWarning,
    print_summary,
    record_pool,
)


def test_log_to_console_and_file(tmp_path, capsys):
    log_path = tmp_path / 'out' / 'run.log'
    init_logging(log_path)

    log("Decoding")
    logWarning("padding ignored")
    logError("bad pool")
    logDebug("string 3 at 0x10")
    record_pool(4)
    record_pool(2)

    print_summary()
    close_logging()

    captured = capsys.readouterr()
    assert "Decoding" in captured.out
    assert "padding ignored" in captured.out
    assert "ERROR: bad pool" in captured.err
    assert "Decoded 2 string pool(s), 6 string(s)" in captured.out
    assert "string 3" not in captured.out

    text = log_path.read_text(encoding='utf-8')
    assert "run started" in text
    assert "Warning: padding ignored" in text
    assert "ERROR: bad pool" in text
    assert "[DEBUG] string 3 at 0x10" in text
    assert "Errors (1):\n  - bad pool" in text
    assert "Warnings (1):\n  - padding ignored" in text
    assert "1 Error(s) | 1 Warning(s)" in text
    assert "run finished" in text
    assert "\033[" not in text


def test_debug_without_log_file_is_silent(tmp_path, capsys):
    close_logging()
    logDebug("nothing to see")

    assert capsys.readouterr().out == ""
    assert not (tmp_path / 'respool.log').exists()


def test_reinit_resets_tally(tmp_path):
    init_logging(tmp_path / 'first.log')
    logWarning("one")
    record_pool(3)
    close_logging()

    init_logging(tmp_path / 'second.log')
    print_summary()
    close_logging()

    text = (tmp_path / 'second.log').read_text(encoding='utf-8')
    assert "Decoded 0 string pool(s), 0 string(s)" in text
    assert "0 Error(s) | 0 Warning(s)" in text

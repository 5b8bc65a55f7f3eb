import pytest

from respool.config import DumpConfig


def test_defaults():
    config = DumpConfig()
    assert config.format == 'text'
    assert not config.show_offsets
    assert config.max_length == 0
    assert config.log_file is None


def test_from_file(tmp_path):
    path = tmp_path / 'respool.ini'
    path.write_text(
        "[output]\n"
        "format = JSON          ; text or json\n"
        "show_offsets = yes\n"
        "max_length = 16\n"
        "\n"
        "[logging]\n"
        "log_file = logs/dump.log\n",
        encoding='utf-8',
    )
    config = DumpConfig.from_file(path)

    assert config.format == 'json'
    assert config.show_offsets
    assert config.max_length == 16
    assert config.log_file == 'logs/dump.log'


def test_partial_file_keeps_defaults(tmp_path):
    path = tmp_path / 'respool.ini'
    path.write_text("[output]\nmax_length = 4\n", encoding='utf-8')
    config = DumpConfig.from_file(path)

    assert config.format == 'text'
    assert config.max_length == 4


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        DumpConfig.from_file(tmp_path / 'absent.ini')


@pytest.mark.parametrize('kwargs', [{'format': 'xml'}, {'max_length': -1}])
def test_invalid_values(kwargs):
    with pytest.raises(ValueError):
        DumpConfig(**kwargs)


def test_invalid_boolean_in_file(tmp_path):
    path = tmp_path / 'respool.ini'
    path.write_text("[output]\nshow_offsets = maybe\n", encoding='utf-8')
    with pytest.raises(ValueError):
        DumpConfig.from_file(path)


def test_truncate():
    assert DumpConfig(max_length=3).truncate('abcdef') == 'abc...'
    assert DumpConfig(max_length=3).truncate('abc') == 'abc'
    assert DumpConfig().truncate('abcdef') == 'abcdef'

from pathlib import Path

import pytest

from flatcodec.utils.yaml import dict_from_extended_yaml, dict_from_yaml


def _write(path: Path, contents: str) -> Path:
    path.write_text(contents)
    return path


def test_dict_from_yaml_invalid_filepath():
    with pytest.raises(ValueError) as e:
        dict_from_yaml(filepath='fake_file.yml')

    assert str(e.value) == "'fake_file.yml' is not a file"


def test_dict_from_yaml_empty(tmp_path):
    filepath = _write(tmp_path / 'empty.yml', '')

    assert dict_from_yaml(filepath=filepath) == {}


def test_dict_from_yaml_invalid_contents(tmp_path):
    filepath = _write(tmp_path / 'number.yml', '123\n')

    with pytest.raises(ValueError) as e:
        dict_from_yaml(filepath=filepath)

    assert str(e.value) == f"'{filepath}' cannot be parsed as a dictionary"


def test_dict_from_yaml_valid(tmp_path):
    filepath = _write(tmp_path / 'valid.yml', 'a: 1\nb:\n  c: 2\n  d: 3\n')

    assert dict_from_yaml(filepath=filepath) == dict(a=1, b=dict(c=2, d=3))


def test_dict_from_extended_yaml_without_extends(tmp_path):
    filepath = _write(tmp_path / 'valid.yml', 'a: 1\nb:\n  c: 2\n  d: 3\n')

    assert dict_from_extended_yaml(filepath=filepath) == dict(a=1, b=dict(c=2, d=3))


def test_dict_from_extended_yaml_valid_extends(tmp_path):
    _write(tmp_path / 'base.yml', 'a: 1\nb:\n  c: 2\n  d: 3\n')
    filepath = _write(tmp_path / 'valid_extends.yml', "extends: base.yml\na: aa\nb:\n  d: dd\n  e: ee\n")

    result = dict_from_extended_yaml(filepath=filepath)

    assert result == dict(a='aa', b=dict(c=2, d='dd', e='ee'))


def test_dict_from_extended_yaml_chained_extends(tmp_path):
    _write(tmp_path / 'first.yml', 'a: 1\nb: 1\nc: 1\n')
    _write(tmp_path / 'second.yml', 'extends: first.yml\nb: 2\nc: 2\n')
    filepath = _write(tmp_path / 'third.yml', 'extends: second.yml\nc: 3\n')

    assert dict_from_extended_yaml(filepath=filepath) == dict(a=1, b=2, c=3)


def test_dict_from_extended_yaml_empty_extends(tmp_path):
    filepath = _write(tmp_path / 'empty_extends.yml', "extends: ''\na: aa\n")

    assert dict_from_extended_yaml(filepath=filepath) == dict(a='aa')


def test_dict_from_extended_yaml_invalid_extends(tmp_path):
    filepath = _write(tmp_path / 'invalid_extends.yml', 'extends: unknown_file.yml\n')

    with pytest.raises(ValueError) as e:
        dict_from_extended_yaml(filepath=filepath)

    assert "unknown_file.yml' is not a file" in str(e.value)


def test_dict_from_extended_yaml_self_extends(tmp_path):
    filepath = _write(tmp_path / 'self_extends.yml', 'extends: self_extends.yml\na: 1\n')

    with pytest.raises(ValueError) as e:
        dict_from_extended_yaml(filepath=filepath)

    assert str(e.value) == f"'{filepath}' cannot extend itself"

from datetime import timedelta

from roachcli.core.config.registry import CACHE_SIZE, INSECURE, MAX_OFFSET, STORES
from roachcli.core.config.validation import validate, validate_context
from roachcli.core.context import Context


def test_validate_accepts_matching_kinds():
    assert validate(1024, CACHE_SIZE) == []
    assert validate(False, INSECURE) == []
    assert validate(timedelta(seconds=1), MAX_OFFSET) == []
    assert validate("", STORES) == []


def test_validate_rejects_bool_for_int64():
    errors = validate(True, CACHE_SIZE)
    assert len(errors) == 1
    assert errors[0].field == "cache_size"
    assert "int64" in errors[0].message


def test_validate_rejects_none_and_out_of_range():
    assert validate(None, STORES)[0].message == "Expected string, got None."
    assert validate(1 << 64, CACHE_SIZE)[0].message == "Value is out of range for int64."


def test_validate_context_defaults_are_clean():
    assert validate_context(Context()) == {}


def test_validate_context_reports_bad_fields():
    context = Context(max_offset="250ms")
    errors = validate_context(context)
    assert list(errors) == ["max-offset"]

import pytest

from graphgate.try_fold import TryFold
from graphgate.valid import Valid, ValidationError


def _errors(*values):
    result = ValidationError.from_error(values[0])
    for value in values[1:]:
        result = result.combine(ValidationError.from_error(value))
    return result


def _failure(fold, input, state):
    with pytest.raises(ValidationError) as info:
        fold.try_fold(input, state).to_result()
    return info.value


def test_and():
    t1 = TryFold(lambda a, b: Valid.succeed(a + b))
    t2 = TryFold(lambda a, b: Valid.succeed(a * b))
    assert t1.and_(t2).try_fold(2, 3).to_result() == 10


def test_one_failure():
    t1 = TryFold(lambda a, b: Valid.fail(a + b))
    t2 = TryFold(lambda a, b: Valid.succeed(a * b))
    assert _failure(t1.and_(t2), 2, 3) == _errors(5)


def test_both_failure():
    t1 = TryFold(lambda a, b: Valid.fail(a + b))
    t2 = TryFold(lambda a, b: Valid.fail(a * b))
    assert _failure(t1.and_(t2), 2, 3) == _errors(5, 6)


def test_1_3_failure_left():
    t1 = TryFold(lambda a, b: Valid.fail(a + b))
    t2 = TryFold(lambda a, b: Valid.succeed(a * b))
    t3 = TryFold(lambda a, b: Valid.fail(a * b * 100))
    assert _failure(t1.and_(t2).and_(t3), 2, 3) == _errors(5, 600)


def test_1_3_failure_right():
    t1 = TryFold(lambda a, b: Valid.fail(a + b))
    t2 = TryFold(lambda a, b: Valid.succeed(a * b))
    t3 = TryFold(lambda a, b: Valid.fail(a * b * 100))
    assert _failure(t1.and_(t2.and_(t3)), 2, 3) == _errors(5, 1200)


def test_2_3_failure():
    t1 = TryFold(lambda a, b: Valid.succeed(a + b))
    t2 = TryFold(lambda a, b: Valid.fail(a * b))
    t3 = TryFold(lambda a, b: Valid.fail(a * b * 100))
    assert _failure(t1.and_(t2.and_(t3)), 2, 3) == _errors(10, 1000)


def test_try_all():
    t1 = TryFold(lambda a, b: Valid.succeed(a + b))
    t2 = TryFold(lambda a, b: Valid.fail(a * b))
    t3 = TryFold(lambda a, b: Valid.fail(a * b * 100))
    assert _failure(TryFold.from_iter([t1, t2, t3]), 2, 3) == _errors(10, 1000)


def test_try_all_1_3_fail():
    t1 = TryFold(lambda a, b: Valid.fail(a + b))
    t2 = TryFold(lambda a, b: Valid.succeed(a * b))
    t3 = TryFold(lambda a, b: Valid.fail(a * b * 100))
    assert _failure(TryFold.from_iter([t1, t2, t3]), 2, 3) == _errors(5, 1200)


def test_from_iter_empty_keeps_state():
    assert TryFold.from_iter([]).try_fold(2, 3).to_result() == 3


def test_transform():
    t = TryFold.succeed(lambda a, b: a + b).transform(lambda v, _: str(v), lambda v: int(v))
    assert t.try_fold(2, "3").to_result() == "5"


def test_transform_valid():
    t = TryFold.succeed(lambda a, b: a + b).transform_valid(
        lambda v, _: Valid.succeed(str(v)),
        lambda v: Valid.succeed(int(v)),
    )
    assert t.try_fold(2, "3").to_result() == "5"


def test_update():
    t = TryFold.succeed(lambda a, b: a + b).update(lambda a: a + 1)
    assert t.try_fold(2, 3).to_result() == 6


def test_empty_returns_state():
    assert TryFold.empty().try_fold(1, "state").to_result() == "state"


def test_fail_always_fails():
    assert _failure(TryFold.fail("boom"), 1, 2) == _errors("boom")


def test_trace_prefixes_failure():
    traced = TryFold.fail("boom").trace("outer")
    error = _failure(traced, 1, 2)
    assert [cause.trace for cause in error] == [("outer",)]


def test_trace_keeps_success():
    traced = TryFold.succeed(lambda a, b: a * b).trace("outer")
    assert traced.try_fold(4, 5).to_result() == 20
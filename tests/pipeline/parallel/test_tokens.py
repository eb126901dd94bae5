# tests/pipeline/parallel/test_tokens.py
import pytest

from scenarios.pipeline.parallel.tokens import TokenStock


def test_capacity_zero_rejected():
    with pytest.raises(ValueError):
        TokenStock(0)


def test_never_exceeds_capacity():
    stock = TokenStock(2)

    a = stock.acquire()
    b = stock.acquire()

    assert a is not None and b is not None
    assert stock.acquire() is None
    assert stock.num_remaining == 0
    assert stock.num_checked_out == 2


def test_release_restores():
    stock = TokenStock(1)
    token = stock.acquire()

    stock.release(token)

    assert stock.num_remaining == 1
    assert stock.acquire() is not None


def test_double_release_rejected():
    stock = TokenStock(1)
    token = stock.acquire()
    stock.release(token)

    with pytest.raises(ValueError):
        stock.release(token)


def test_foreign_token_rejected():
    stock, other = TokenStock(1), TokenStock(1)
    token = other.acquire()

    with pytest.raises(ValueError):
        stock.release(token)
    assert stock.num_remaining == 1

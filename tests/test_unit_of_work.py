import pytest

from catalog.unit_of_work import InMemoryUnitOfWork


def test_exposes_repository(uow, repo):
    assert uow.books is repo


def test_transaction_flags(uow):
    assert uow.in_transaction is False
    uow.begin_transaction()
    assert uow.in_transaction is True
    assert uow.save_changes() == 1
    uow.commit()
    assert uow.in_transaction is False

    uow.begin_transaction()
    uow.rollback()
    assert uow.in_transaction is False


def test_requires_repository():
    with pytest.raises(ValueError):
        InMemoryUnitOfWork(None)


def test_commit_without_transaction_fails(uow):
    with pytest.raises(RuntimeError, match="no transaction in progress"):
        uow.commit()

    uow.begin_transaction()
    uow.commit()
    with pytest.raises(RuntimeError):
        uow.commit()

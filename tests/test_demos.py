import threading

import pytest

from taskboard.demos import (
    BankAccount,
    Person,
    hello,
    numbers_then_letters,
    run_bank_demo,
    run_channel_demo,
    run_workers,
)


def test_person_update_name():
    person = Person("John")
    assert person.name == "John"
    person.update_name("Jane")
    assert person.name == "Jane"


def test_people_are_independent():
    first = Person("John")
    second = Person("Bob")
    first.update_name("Jane")
    assert second.name == "Bob"


def test_deposit_returns_new_balance_and_reports():
    messages = []
    account = BankAccount(1000, delay=0, report=messages.append)
    assert account.deposit(100) == 1100
    assert account.balance == 1100
    assert messages == ["Deposited 100, new balance: 1100"]


def test_withdraw_reports_and_reduces_balance():
    messages = []
    account = BankAccount(1000, delay=0, report=messages.append)
    assert account.withdraw(50) is True
    assert account.balance == 950
    assert messages == ["Withdrawn 50, new balance: 950"]


def test_withdraw_refused_when_funds_short():
    messages = []
    account = BankAccount(30, delay=0, report=messages.append)
    assert account.withdraw(50) is False
    assert account.balance == 30
    assert messages == []


def test_concurrent_deposits_are_not_lost():
    account = BankAccount(0, delay=0, report=None)
    threads = [threading.Thread(target=account.deposit, args=(7,)) for _ in range(40)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    assert account.balance == 7 * 40


@pytest.mark.parametrize("workers", [0, 1, 2])
def test_bank_demo_balance(workers, capsys):
    final = run_bank_demo(workers)
    lines = capsys.readouterr().out.splitlines()
    assert final == 1000 + (100 - 50) * workers
    assert lines[0] == "Original balance: 1000"
    assert lines[-1] == f"Final balance: {final}"
    assert len(lines) == 2 + 2 * workers


def test_run_workers_finish_in_delay_order(capsys):
    finished = run_workers(3, 0.05)
    out = capsys.readouterr().out.splitlines()
    assert finished == [1, 2, 3]
    assert "Waiting for all workers to finish..." in out
    assert out[-1] == "All workers completed!"
    for worker_id in (1, 2, 3):
        assert out.index(f"Worker {worker_id} starting") < out.index(f"Worker {worker_id} done")


def test_run_workers_zero():
    assert run_workers(0, 0) == []


def test_channel_demo_values(capsys):
    received = run_channel_demo()
    out = capsys.readouterr().out.splitlines()
    assert sorted(received[:2]) == [2, 5]
    assert received[2] == 10
    assert out[-1] == "someFunction3 10"


def test_numbers_then_letters_order(capsys):
    lines = numbers_then_letters()
    assert lines == [str(n) for n in range(10)] + list("abcdefghi")
    assert capsys.readouterr().out.splitlines() == lines


def test_hello(capsys):
    assert hello() == "Hello, World!"
    assert capsys.readouterr().out == "Hello, World!\n"
"""Small concurrency and object demonstrations: bank account, workers, channels."""

from __future__ import annotations

import queue
import string
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

Reporter = Optional[Callable[[str], None]]

OPENING_BALANCE = 1000
DEPOSIT_AMOUNT = 100
WITHDRAW_AMOUNT = 50
PROCESSING_DELAY = 0.1


@dataclass
class Person:
    """A person with a name that can be changed in place."""

    name: str

    def update_name(self, new_name: str) -> None:
        """Replace the person's name."""
        self.name = new_name


@dataclass
class BankAccount:
    """An account whose balance changes are serialised by a lock."""

    _balance: int = 0
    delay: float = PROCESSING_DELAY
    report: Reporter = print
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @property
    def balance(self) -> int:
        """The current balance."""
        with self._lock:
            return self._balance

    def _say(self, message: str) -> None:
        if self.report is not None:
            self.report(message)

    def deposit(self, amount: int) -> int:
        """Add amount to the balance and return the new balance."""
        with self._lock:
            time.sleep(self.delay)
            self._balance += amount
            balance = self._balance
            self._say(f"Deposited {amount}, new balance: {balance}")
        return balance

    def withdraw(self, amount: int) -> bool:
        """Take amount from the balance if it covers it; report whether it did."""
        with self._lock:
            if self._balance < amount:
                return False
            time.sleep(self.delay)
            self._balance -= amount
            self._say(f"Withdrawn {amount}, new balance: {self._balance}")
        return True


def run_bank_demo(workers: int = 5) -> int:
    """Let several threads deposit and withdraw concurrently; return the final balance."""
    print(f"Original balance: {OPENING_BALANCE}")
    account = BankAccount(OPENING_BALANCE)

    def churn() -> None:
        account.deposit(DEPOSIT_AMOUNT)
        account.withdraw(WITHDRAW_AMOUNT)

    threads = [threading.Thread(target=churn) for _ in range(workers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    final = account.balance
    print(f"Final balance: {final}")
    return final


def run_workers(count: int = 5, delay: float = PROCESSING_DELAY) -> list[int]:
    """Run numbered workers that each sleep id * delay; return ids in finishing order."""
    finished: list[int] = []
    lock = threading.Lock()

    def worker(worker_id: int) -> None:
        print(f"Worker {worker_id} starting")
        time.sleep(worker_id * delay)
        print(f"Worker {worker_id} done")
        with lock:
            finished.append(worker_id)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(1, count + 1)]
    for thread in threads:
        thread.start()
    print("Waiting for all workers to finish...")
    for thread in threads:
        thread.join()
    print("All workers completed!")
    return finished


def run_channel_demo() -> list[int]:
    """Pass values through a one-slot queue between threads; return them as received."""
    channel: queue.Queue[int] = queue.Queue(maxsize=1)
    received: list[int] = []

    senders = [threading.Thread(target=channel.put, args=(value,)) for value in (5, 2)]
    for sender in senders:
        sender.start()

    for _ in senders:
        value = channel.get()
        print("main:", value)
        received.append(value)
    for sender in senders:
        sender.join()

    channel.put(10)

    def consume() -> None:
        value = channel.get()
        print("someFunction3", value)
        received.append(value)

    consumer = threading.Thread(target=consume)
    consumer.start()
    consumer.join()
    return received


def numbers_then_letters() -> list[str]:
    """Print digits 0-9, then letters a-i once the digits are done; return the lines."""
    lines: list[str] = []
    done = threading.Event()

    def numbers() -> None:
        for number in range(10):
            print(number)
            lines.append(str(number))
        done.set()

    def letters() -> None:
        done.wait()
        for letter in string.ascii_lowercase[:9]:
            print(letter)
            lines.append(letter)

    threads = [threading.Thread(target=numbers), threading.Thread(target=letters)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return lines


def hello() -> str:
    """Print and return the classic greeting."""
    greeting = "Hello, World!"
    print(greeting)
    return greeting
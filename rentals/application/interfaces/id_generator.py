"""Interface IdGenerator - port for booking identifiers."""

import uuid
from abc import ABC, abstractmethod

# Namespace for booking ids derived from a provider payment id.
PAYMENT_BOOKING_NAMESPACE = uuid.UUID("6f1b3c7e-2d4a-4f0e-9b8a-5c3d2e1f0a9b")


def booking_id_for_payment(provider_payment_id: str) -> str:
    """
    Deterministic booking id for the payment-first path.

    Every delivery of the same payment maps to the same primary key, so a
    duplicate webhook cannot create a second row even before the unique
    payment-reference index is consulted.
    """
    return str(uuid.uuid5(PAYMENT_BOOKING_NAMESPACE, provider_payment_id))


class IdGenerator(ABC):
    """
    Port for generating booking ids.

    Allows deterministic fakes in tests.
    """

    @abstractmethod
    def new_booking_id(self) -> str:
        raise NotImplementedError


class RandomIdGenerator(IdGenerator):
    """UUID v4 ids."""

    def new_booking_id(self) -> str:
        return str(uuid.uuid4())


class FakeIdGenerator(IdGenerator):
    """
    Fake for testing: predictable, sequential ids.
    """

    def __init__(self, prefix: str = "bk"):
        self._prefix = prefix
        self._counter = 0

    def new_booking_id(self) -> str:
        self._counter += 1
        return f"{self._prefix}-{self._counter:06d}"

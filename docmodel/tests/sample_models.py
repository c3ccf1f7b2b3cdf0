"""Classes used by the test suites."""

from dataclasses import dataclass
from typing import Annotated

from docmodel.model import Id, Ignore, Property, creator, discriminator


@dataclass
class Address:
    street: str
    city: str


@discriminator(key="_t", value="person")
class Person:
    id: Annotated[str, Id()]
    name: Annotated[str, Property("full_name")]
    age: int
    password: Annotated[str, Ignore()]

    def __init__(self, id: str, name: str, age: int = 0) -> None:
        self.id = id
        self.name = name
        self.age = age
        self.password = ""

    @creator
    @classmethod
    def create(
        cls,
        id: Annotated[str, Id()],
        name: Annotated[str, Property("full_name")],
    ) -> "Person":
        return cls(id, name)


class Account:
    """Declares no markers; the manifest suites supply them."""

    number: str
    owner: str
    balance: float
    secret: str

    def __init__(self, number: str, owner: str) -> None:
        self.number = number
        self.owner = owner
        self.balance = 0.0
        self.secret = ""

    @staticmethod
    def open(number: str, holder: str) -> "Account":
        return Account(number, holder)

    def deposit(self, amount: float) -> None:
        self.balance += amount


class Thermostat:
    def __init__(self) -> None:
        self._celsius = 0.0

    @property
    def celsius(self) -> Annotated[float, Property("c")]:
        return self._celsius

    @celsius.setter
    def celsius(self, value: Annotated[float, Property("temp_c")]) -> None:
        self._celsius = value

    @property
    def fahrenheit(self) -> float:
        return self._celsius * 9 / 5 + 32


class Point:
    x: int
    y: int

    @creator
    def __init__(self, x: Annotated[int, Property("x")], y: Annotated[int, Property("y")]) -> None:
        self.x = x
        self.y = y


class Ambiguous:
    value: int

    @creator
    def __init__(self, value: Annotated[int, Property("value")]) -> None:
        self.value = value

    @creator
    @staticmethod
    def make(value: Annotated[int, Property("value")]) -> "Ambiguous":
        return Ambiguous(value)


class WrongFactory:
    value: int

    @creator
    @staticmethod
    def make(value: Annotated[int, Property("value")]) -> Address:
        return Address("", "")


class Unannotated:
    value: int

    @creator
    def __init__(self, value: Annotated[int, Property("value")], extra: str) -> None:
        self.value = value


class Mismatched:
    value: str

    @creator
    def __init__(self, value: Annotated[int, Property("value")]) -> None:
        self.value = str(value)

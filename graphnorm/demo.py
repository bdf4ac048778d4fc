"""
Demo object graph: a small company with cross-linked employees.

Every person appears both in the employee list and in the by-name index,
managers and employees point at each other, and genders are enum members, so
the graph exercises shared references, cycles, symbols and registered classes.
"""

import datetime as dt
import enum
from typing import Dict, List, Optional

from .converters import all_of, all_props
from .core import Engine


class Gender(enum.Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"


class Person:
    def __init__(self, name: str, birth_date: dt.date) -> None:
        self.name = name
        self.birth_date = birth_date
        self.has_cat = False
        self.address_info: Dict[str, str] = {}
        self.gender: Optional[Gender] = None

    def set_has_cat(self, value: bool) -> None:
        self.has_cat = value


class Employee(Person):
    def __init__(self, name: str, birth_date: dt.date) -> None:
        super().__init__(name, birth_date)
        self.manager: Optional["Manager"] = None


class Manager(Person):
    def __init__(self, name: str, birth_date: dt.date) -> None:
        super().__init__(name, birth_date)
        self.employees: List[Person] = []
        self.manager: Optional["Manager"] = None


class Company:
    def __init__(self) -> None:
        self.employees: List[Person] = []
        self.employees_by_name: Dict[str, Person] = {}
        self.profit = 5000000

    def add_employees(self, *employees: Person) -> None:
        for employee in employees:
            self.employees.append(employee)
            self.employees_by_name[employee.name] = employee


def add_relation(employee: Person, manager: Manager) -> None:
    employee.manager = manager
    manager.employees.append(employee)


def build_company() -> Company:
    company = Company()
    john = Employee("john", dt.date(1980, 5, 16))
    john.gender = Gender.MALE
    anna = Employee("anna", dt.date(1983, 10, 2))
    mike = Manager("mike", dt.date(1968, 5, 23))
    tina = Manager("tina", dt.date(1986, 1, 6))
    tina.gender = Gender.FEMALE

    company.profit = 1000000
    company.add_employees(john, anna, mike, tina)
    add_relation(john, tina)
    add_relation(anna, mike)
    add_relation(mike, tina)
    tina.set_has_cat(True)
    return company


def company_engine(base: Optional[Engine] = None) -> Engine:
    """Default engine extended with converters for the demo classes."""
    return (base or Engine.default()).with_converters(
        all_of(all_props, Employee, Manager, Company)
    )

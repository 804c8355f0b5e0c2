from signups.stores.interfaces import Decision, SignupBook, Transactor
from signups.stores.memory_store import InMemorySignupBook, InMemoryTransactor

__all__ = [
    "Decision",
    "SignupBook",
    "Transactor",
    "InMemorySignupBook",
    "InMemoryTransactor",
]

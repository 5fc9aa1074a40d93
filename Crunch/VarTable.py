# VarTable.py
"""
Variables and the variable table.

The table is a list kept sorted by identifier, so lookups, inserts and removals
are a binary search away, and no two variables ever share an identifier.
"""

import bisect
from dataclasses import dataclass

from . import error as E
from .Tokens import Token, token_from_dict


@dataclass(frozen=True)
class Variable:
    """An identifier bound to an (already simplified) expression."""
    id: str
    value: Token

    def get_value(self):
        return self.value


class VarTable:

    def __init__(self, variables=()):
        self.variables = []
        self._ids = []  # Kept in step with self.variables, used for bisect
        for variable in variables:
            self.store(variable)

    def _index(self, id):
        """Return (position, found) for id in the sorted table."""
        position = bisect.bisect_left(self._ids, id)
        found = position < len(self._ids) and self._ids[position] == id
        return position, found

    def add(self, variable):
        """Add a new variable, failing if the identifier is already taken."""
        position, found = self._index(variable.id)
        if found:
            raise E.VariableExistsError(f"Variable \"{variable.id}\" already exists!")
        self._ids.insert(position, variable.id)
        self.variables.insert(position, variable)

    def store(self, variable):
        """Add a variable or replace the one with the same identifier."""
        position, found = self._index(variable.id)
        if found:
            self.variables[position] = variable
        else:
            self._ids.insert(position, variable.id)
            self.variables.insert(position, variable)

    def remove(self, id):
        position, found = self._index(id)
        if not found:
            raise E.VariableNotFoundError(f"Variable \"{id}\" not found!")
        del self._ids[position]
        del self.variables[position]

    def get(self, id):
        position, found = self._index(id)
        if not found:
            raise E.VariableNotFoundError(f"Variable \"{id}\" not found!")
        return self.variables[position]

    def merge(self, other):
        """Store every variable of other into this table; other wins on conflicts."""
        for variable in other:
            self.store(variable)

    def to_dict(self):
        return {"variables": [{"id": v.id, "value": v.value.to_dict()} for v in self.variables]}

    @classmethod
    def from_dict(cls, data):
        return cls(Variable(entry["id"], token_from_dict(entry["value"])) for entry in data.get("variables", []))

    def __len__(self):
        return len(self.variables)

    def __iter__(self):
        return iter(list(self.variables))

    def __contains__(self, id):
        return self._index(id)[1]

    def __repr__(self):
        return f"VarTable({self.variables!r})"

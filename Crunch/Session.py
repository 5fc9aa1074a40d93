# Session.py
"""
A calculator session: one variable table, one answer history, one precision.

Session.calculate() is the public entry point used by the UI:
parse -> get_equality -> history entry.
"""

import logging

from . import config_manager as config_manager
from . import error as E
from . import OpEngine
from . import Parser
from .History import HistoryEntry, HistoryManager
from .VarTable import VarTable

logger = logging.getLogger(__name__)


class Session:

    def __init__(self, decimal_places=12, history=None, var_table=None):
        self.decimal_places = decimal_places
        self.history = history if history is not None else HistoryManager(decimal_places=decimal_places)
        self.var_table = var_table if var_table is not None else VarTable()

    @classmethod
    def from_config(cls):
        """Build a session from config.json; history files are read when keep_history is on."""
        settings = config_manager.load_setting_value("all")
        decimal_places = int(settings["decimal_places"])

        if settings["keep_history"]:
            history = HistoryManager(config_manager.history_dir(), decimal_places=decimal_places)
        else:
            history = HistoryManager(decimal_places=decimal_places)

        return cls(decimal_places=decimal_places, history=history)

    def calculate(self, problem):
        """Evaluate problem and record it; returns the new HistoryEntry.

        On any error nothing is recorded and the variable table is unchanged.
        """
        # Stores land in a scratch copy that is merged back only on success
        scratch_table = VarTable(self.var_table)

        try:
            tree = Parser.parse_str(problem, self.var_table, self.history)
            equality = OpEngine.get_equality(tree, scratch_table, self.history, self.decimal_places)

        # Re-raise our domain errors after attaching the source equation
        except E.MathError as e:
            e.equation = problem
            raise e
        except RecursionError:
            raise E.MathError("Expression nested too deeply.", code="7001", equation=problem)

        self.var_table.merge(scratch_table)

        entry = HistoryEntry.new(equality, self.decimal_places)
        self.history.add_entry(entry)
        logger.debug("%s", entry.rendition)
        return entry

    def set_decimal_places(self, decimal_places):
        """Change the precision for new calculations and for the saved history file."""
        self.decimal_places = decimal_places
        self.history.decimal_places = decimal_places

    def render(self, token):
        return token.to_string(self.decimal_places)

    def save(self):
        return self.history.update_file()

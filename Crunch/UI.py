# UI.py
"""
PySide6 user interface for the Crunch calculator.

Structure
---------
- Calculator UI: history list above an entry line
- Settings UI: modal dialog for user preferences

Responsibilities (Calculator)
-----------------------------
- Dispatch the entry line to the Session in a worker thread
- Append 'input = result' lines to the history list
- Show calculation errors as dialogs; the session keeps running
- Clicking a history line inserts its input into the entry line,
  Shift+click copies its result to the clipboard
- Write the session history to disk on close (keep_history setting)

Threading Note
--------------
Evaluation runs off the UI thread in Worker(QObject), one calculation at a time.
Results (or errors) are emitted via a Qt signal and handled back in the UI.
"""

import logging
import sys
import threading

from PySide6 import QtWidgets
from PySide6.QtCore import QObject, Signal
from pynput.keyboard import Controller
import pyperclip

from . import config_manager as config_manager
from . import error as E
from .Session import Session

logger = logging.getLogger(__name__)


def is_shift_pressed():
    """""

    Small and simple check, whether shift is pressed or not.
    Used for the "shift to copy" behaviour of the history list.

    """""

    keyboard_controller = Controller()
    return keyboard_controller.shift_pressed


class Worker(QObject):
    """""

    Runs one calculation on a separate thread and emits job_finished with either
    the new HistoryEntry or a MathError.

    """""

    job_finished = Signal(object, str)

    def __init__(self, session, problem):
        super().__init__()
        self.session = session
        self.data = problem

    def run_Calc(self):

        try:
            entry = self.session.calculate(self.data)
            self.job_finished.emit(entry, self.data)

        except E.MathError as e:
            # Known, handled error (e.g. "Unknown variable")
            self.job_finished.emit(e, self.data)

        except Exception as e:
            # Unexpected crash we didn't plan for (a bug in the code)
            logger.exception("Calculation crashed: %s", self.data)
            critical_error = E.MathError(
                message=f"Unexpected crash: {e}",
                code="9999",
                equation=self.data
            )
            self.job_finished.emit(critical_error, self.data)


class SettingsDialog(QtWidgets.QDialog):
    """""

    Settings window. Boolean settings become checkboxes, integer settings input fields.
    Settings are saved to config.json on OK and ignored on Cancel.

    """""

    settings_saved = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.widgets = {}

        self.setWindowTitle("Calculator Settings")
        self.setMinimumSize(300, 200)

        main_layout = QtWidgets.QVBoxLayout(self)

        self.setting_value_list = config_manager.load_setting_value("all")
        self.setting_description_list = config_manager.load_setting_description("all")

        for key_value, value in self.setting_value_list.items():
            description = self.setting_description_list.get(key_value, key_value)

            # --- Checkbox Builder (for Boolean settings) ---
            if isinstance(value, bool):
                checkbox = QtWidgets.QCheckBox(description)
                checkbox.setChecked(value)
                main_layout.addWidget(checkbox)
                self.widgets[key_value] = checkbox

            # --- Input Field Builder (for Integer settings) ---
            elif isinstance(value, int):
                row_h_layout = QtWidgets.QHBoxLayout()
                main_layout.addLayout(row_h_layout)
                label = QtWidgets.QLabel(description + ":")
                input_field = QtWidgets.QLineEdit()
                input_field.setPlaceholderText(str(value))

                row_h_layout.addWidget(label)
                row_h_layout.addWidget(input_field)
                row_h_layout.setStretch(1, 1)
                self.widgets[key_value] = input_field

        button_box = QtWidgets.QDialogButtonBox(QtWidgets.QDialogButtonBox.Ok | QtWidgets.QDialogButtonBox.Cancel)
        main_layout.addWidget(button_box)
        main_layout.addStretch(1)

        button_box.accepted.connect(self.save_settings)
        button_box.rejected.connect(self.reject)

        self.update_darkmode()

    def save_settings(self):
        setting_value_list = dict(self.setting_value_list)

        for key_value, widget in self.widgets.items():

            if isinstance(widget, QtWidgets.QCheckBox):
                setting_value_list[key_value] = widget.isChecked()

            elif isinstance(widget, QtWidgets.QLineEdit):
                new_value_str = widget.text().strip()

                # If user left it blank, keep the old value
                if new_value_str == "":
                    continue

                try:
                    new_value_int = int(new_value_str)
                    if key_value == "decimal_places" and new_value_int < 0:
                        raise ValueError(f"'{new_value_int}' is too small. Minimum is 0.")
                except ValueError as e:
                    logger.warning("Invalid Input for %s: %s", key_value, e)
                    QtWidgets.QMessageBox.critical(self, "Invalid Input:",
                                                   f"Error in input for '{key_value}':\n\n{e}\n\nPlease correct your input.")
                    return  # Stop saving!

                setting_value_list[key_value] = new_value_int

        saved_settings = config_manager.save_setting(setting_value_list)

        if saved_settings != {}:
            self.setting_value_list = saved_settings
            self.settings_saved.emit()
            self.accept()
        else:
            QtWidgets.QMessageBox.critical(self, "Error",
                                           f"Error 4501: {E.ERROR_MESSAGES['4501']}{config_manager.config_json}")

    def update_darkmode(self):
        if self.setting_value_list["darkmode"] == True:
            self.setStyleSheet("""
                        QDialog {background-color: #121212;}
                        QLabel {color: white;}
                        QCheckBox {color: white;}
                        QLineEdit {background-color: #444444;color: white;border: 1px solid #666666;}
                        QDialogButtonBox QPushButton {background-color: #666666;color: white;}""")
        else:
            self.setStyleSheet("")


class CalculatorWindow(QtWidgets.QWidget):

    def __init__(self, session=None):
        super().__init__()

        self.setting_value_list = config_manager.load_setting_value("all")

        if session is None:
            try:
                session = Session.from_config()
            except E.HistoryError as e:
                # A broken history file should not keep the calculator from starting
                logger.warning("%s", e.message)
                session = Session(decimal_places=int(self.setting_value_list["decimal_places"]))
        self.session = session

        self.thread_active = False  # Is a calculation running?
        self.entries = []  # HistoryEntry per row of the history list

        # --- Window Setup ---
        self.setWindowTitle("Crunch")
        self.resize(480, 540)
        main_v_layout = QtWidgets.QVBoxLayout(self)

        # --- History ---
        self.history_list = QtWidgets.QListWidget()
        self.history_list.itemClicked.connect(self.handle_history_click)
        main_v_layout.addWidget(self.history_list, 1)

        # --- Entry bar ---
        entry_row = QtWidgets.QHBoxLayout()
        self.entry_bar = QtWidgets.QLineEdit()
        self.entry_bar.setPlaceholderText("2 + 2, 3 -> x, @1 * x ...")
        self.entry_bar.returnPressed.connect(self.handle_enter)
        self.settings_button = QtWidgets.QPushButton("⚙")
        self.settings_button.clicked.connect(self.open_settings)
        entry_row.addWidget(self.entry_bar, 1)
        entry_row.addWidget(self.settings_button)
        main_v_layout.addLayout(entry_row)

        for entry in self.session.history.get_entries():
            self.add_history_row(entry)

        self.update_darkmode()
        self.entry_bar.setFocus()

    def add_history_row(self, entry):
        self.entries.append(entry)
        self.history_list.addItem(entry.to_string())
        self.history_list.scrollToBottom()

    def handle_enter(self):
        problem = self.entry_bar.text()
        if problem.strip() == "":
            return

        if self.thread_active:
            logger.warning("Error 4002: %s", E.ERROR_MESSAGES["4002"])
            return

        self.thread_active = True
        self.entry_bar.setReadOnly(True)

        # --- Start Worker Thread ---
        worker_instance = Worker(self.session, problem)
        worker_instance.job_finished.connect(self.Calc_result)
        self.worker_instance = worker_instance  # Keep the QObject alive until it reports back
        my_thread = threading.Thread(target=worker_instance.run_Calc)
        my_thread.start()

    def handle_history_click(self, item):
        entry = self.entries[self.history_list.row(item)]

        if is_shift_pressed():
            # Shift held: copy the result
            pyperclip.copy(self.session.render(entry.without_equality()))
        else:
            # Insert the entry's input at the cursor
            self.entry_bar.insert(entry.render_input(self.session.decimal_places))
            self.entry_bar.setFocus()

    def Calc_result(self, result, equation):
        self.thread_active = False
        self.entry_bar.setReadOnly(False)

        if isinstance(result, E.MathError):
            error_obj = result
            error_box = QtWidgets.QMessageBox(self)
            error_code = error_obj.code
            additional_info = f"Details: {error_obj.message}\nEquation: {error_obj.equation}"

            error_box.setIcon(QtWidgets.QMessageBox.Critical)
            error_box.setWindowTitle("Calculation error")
            error_box.setText(f"Error {error_code}: {E.ERROR_MESSAGES.get(error_code, 'Unknown error')}")
            error_box.setInformativeText(additional_info)
            error_box.setStandardButtons(QtWidgets.QMessageBox.Ok)
            error_box.setStyleSheet(self.get_message_box_stylesheet())
            error_box.exec()
            return

        self.add_history_row(result)
        self.entry_bar.clear()

        if self.setting_value_list["copy_on_enter"] == True:
            pyperclip.copy(self.session.render(result.without_equality()))

    def open_settings(self):
        settings_dialog = SettingsDialog(self)
        settings_dialog.exec()

        # Reload settings after dialog closes
        self.setting_value_list = config_manager.load_setting_value("all")
        self.session.set_decimal_places(int(self.setting_value_list["decimal_places"]))
        self.update_darkmode()

    def update_darkmode(self):
        if self.setting_value_list["darkmode"] == True:
            self.setStyleSheet("background-color: #121212; color: white;")
            self.entry_bar.setStyleSheet("background-color: #2e2e2e; color: white; font-weight: bold;")
        else:
            self.setStyleSheet("")
            self.entry_bar.setStyleSheet("font-weight: bold;")

    def get_message_box_stylesheet(self):
        if self.setting_value_list["darkmode"] == True:
            return """
                QMessageBox {
                    background-color: #121212;
                    color: white;
                }
                QLabel {
                    color: white;
                }
                QPushButton {
                    background-color: #2e2e2e;
                    color: white;
                    border: 1px solid #444444;
                    padding: 5px 15px;
                }
            """
        else:
            return ""

    def closeEvent(self, event):
        if self.setting_value_list["keep_history"] == True:
            try:
                self.session.save()
            except OSError as e:
                logger.error("History could not be written: %s", e)
        super().closeEvent(event)


def main():
    app = QtWidgets.QApplication(sys.argv)
    window = CalculatorWindow()
    window.show()
    sys.exit(app.exec())


if __name__ == "__main__":
    main()

"""Hojas de estilo QSS compartidas por ventanas y dialogos."""

from __future__ import annotations

DIALOG_QSS = """
QDialog {
    background-color: #eef1f4;
}
QFrame#dialogCard {
    background-color: #ffffff;
    border-radius: 16px;
}
QLabel#titleLabel {
    color: #20232a;
    font-family: "Segoe UI";
    font-size: 22px;
    font-weight: 700;
}
QLabel#fieldLabel {
    color: #334155;
    font-family: "Segoe UI";
    font-size: 13px;
    font-weight: 600;
}
QLabel#helpLabel {
    color: #475569;
    font-family: "Segoe UI";
    font-size: 12px;
    background-color: #f8fafc;
    border: 1px solid #d1d5db;
    border-radius: 8px;
    padding: 10px;
}
QLineEdit, QComboBox, QDoubleSpinBox, QDateEdit {
    background-color: #f8fafc;
    border: 1px solid #d1d5db;
    border-radius: 8px;
    color: #111827;
    font-family: "Segoe UI";
    font-size: 13px;
    padding: 8px;
}
QLineEdit:focus, QComboBox:focus, QDoubleSpinBox:focus, QDateEdit:focus {
    border: 1px solid #2f855a;
    background-color: #ffffff;
}
QPushButton {
    background-color: #2f855a;
    border: none;
    border-radius: 10px;
    color: #ffffff;
    font-family: "Segoe UI";
    font-size: 13px;
    font-weight: 600;
    min-height: 40px;
    min-width: 100px;
    padding: 8px 12px;
}
QPushButton:hover {
    background-color: #276749;
}
QPushButton:pressed {
    background-color: #22543d;
}
QPushButton#cancelButton {
    background-color: #e5e7eb;
    color: #1f2937;
}
QPushButton#cancelButton:hover {
    background-color: #d1d5db;
}
"""

WINDOW_QSS = """
QMainWindow {
    background-color: #eef1f4;
}
QFrame#navCard, QFrame#statCard {
    background-color: #ffffff;
    border-radius: 14px;
}
QLabel#titleLabel {
    color: #20232a;
    font-family: "Segoe UI";
    font-size: 22px;
    font-weight: 700;
}
QLabel#statValue {
    color: #2f855a;
    font-family: "Segoe UI";
    font-size: 24px;
    font-weight: 700;
}
QLabel#statLabel {
    color: #475569;
    font-family: "Segoe UI";
    font-size: 12px;
}
QTableWidget {
    background-color: #ffffff;
    border: 1px solid #dbe2ea;
    border-radius: 10px;
    font-family: "Segoe UI";
    font-size: 13px;
}
QPushButton {
    background-color: #2f855a;
    border: none;
    border-radius: 10px;
    color: #ffffff;
    font-family: "Segoe UI";
    font-size: 14px;
    font-weight: 600;
    min-height: 40px;
    padding: 8px 14px;
}
QPushButton:hover {
    background-color: #276749;
}
QPushButton:pressed {
    background-color: #22543d;
}
QPushButton:checked {
    background-color: #22543d;
}
QPushButton#dangerButton {
    background-color: #c53030;
}
QPushButton#dangerButton:hover {
    background-color: #9b2c2c;
}
QPushButton#exitButton {
    background-color: #e5e7eb;
    color: #1f2937;
}
QPushButton#exitButton:hover {
    background-color: #d1d5db;
}
"""

"""Florina attendance package.

Employee identity verification and daily attendance recording, organized by
feature modules (employees, attendance) over a small Store abstraction, with a
thin Flask controller layer on top.
"""

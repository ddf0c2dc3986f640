"""Event check-in package.

Organized by feature modules (roster, attendance, export, entries) on top of an
async document-store layer, with a thin Flask controller layer per feature.
"""

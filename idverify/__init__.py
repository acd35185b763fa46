"""
ID Document Verification Pipeline

This package contains the complete pipeline for ID document verification:
- OCR text normalization
- Field extraction (name, date of birth, ID number, phone number)
- Fuzzy comparison against user-entered values
- Final verdict and result report
"""

__version__ = "1.0.0"

"""
HIV Treatment and Medical Services System

A FastAPI backend for HIV care: appointment booking, lab tests,
prescriptions, ARV protocols and treatment plans, gated by role codes.
"""

__version__ = "1.0.0"

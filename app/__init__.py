"""
Kinetic Intake Report Service

Biomechanical intake -> hosted assistant -> stored diagnostic report,
with PDF export and email delivery.
"""
__version__ = "1.0.0"

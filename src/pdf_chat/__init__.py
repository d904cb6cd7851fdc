"""
PDF Chat Assistant - chat with an uploaded PDF through a hosted LLM,
with a dedicated analysis prompt for blood-test reports.
"""

__version__ = "1.0.0"

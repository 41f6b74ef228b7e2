"""
modelprices - query and validate AI model pricing tables
"""

__version__ = "0.1.0"
__logo__ = "💲"

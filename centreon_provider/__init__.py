"""
Centreon Provider

Declarative management of Centreon monitoring configuration: hosts are
reconciled against the Centreon REST API, and configuration collections
are exposed as read-only data sources.
"""

# Logging is configured at the entry point via centreon_provider/logging_utils.py

__version__ = "0.1.0"
__author__ = "Centreon Provider"
__description__ = "Reconciliation client for the Centreon REST API"

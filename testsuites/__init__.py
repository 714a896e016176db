"""
Storefront test suites.

`testsuites` stays importable so that page objects and framework helpers can
be used from:
  - the live scenarios under ui_testing/tests
  - the browser-free checks under unit/
  - programmatic runners (e.g., `run_tests.py`)

Credentials are the public demo identities of the storefront.
"""

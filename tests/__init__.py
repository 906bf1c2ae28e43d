"""formjson test suite.

Test organization:
- unit/: field rules, character patterns, the validation engine, payload
  building, input loading, reports, errors, logging, clipboard and the CLI
- tui/: form session state machine, settings loading and app construction
"""

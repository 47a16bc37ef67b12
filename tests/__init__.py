"""
Companion Pipeline Tests

Unit tests for each component live in tests/unit/. Multi-turn
conversations that thread state through the pipeline live in
tests/test_pipeline_integration.py.

Running Tests:
    # Run everything
    pytest -v

    # Run one component
    pytest tests/unit/test_guards.py -v

    # Run the integration scenarios
    pytest tests/test_pipeline_integration.py -v
"""

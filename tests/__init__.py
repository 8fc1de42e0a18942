"""
releaseplan Test Suite
======================

Test organization mirrors the source code structure:
    tests/
    ├── test_core/          → config, models, exceptions, logging
    ├── test_versioning/    → SVersion and the provenance descriptor codec
    ├── test_feeds/         → destinations, Destination Selector, probes
    ├── test_planning/      → Publication Planner, plan model, summary
    ├── test_integrations/  → CI build-version reporting
    ├── test_facade.py      → ReleasePlanner end to end
    └── conftest.py         → Shared pytest fixtures

Running Tests:
    pytest                          # Run all tests
    pytest tests/test_feeds/        # Run only feed tests
"""

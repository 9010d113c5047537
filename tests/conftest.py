"""Shared test fixtures for bilingual-dictionary."""

import pytest

from bilingual_dictionary import DictionaryService


@pytest.fixture
def service():
    """Create an in-memory dictionary for testing."""
    with DictionaryService(":memory:") as svc:
        yield svc


@pytest.fixture
def service_with_data(service):
    """Dictionary with kot/cat and pies/dog linked, and examples for kot."""
    kot = service.add_word("kot", "pl")
    pies = service.add_word("pies", "pl")
    cat = service.add_word("cat", "en")
    dog = service.add_word("dog", "en")
    service.add_translation("kot", "cat")
    service.add_translation("pies", "dog")
    service.add_example("kot", "pl", "Kot śpi.")
    service.add_example("kot", "pl", "Kot pije mleko.")
    return service, kot, pies, cat, dog

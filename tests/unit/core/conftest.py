"""Shared fixtures for core unit tests"""

import pytest

from outbreak.config import TasksConfig, TranslationConfig


SAMPLE_MD = """\
# Heading 1

A paragraph with ==marked== text.

## Heading 2

- item one
- item two

```python
print("hello")

print("world")
```

Footer paragraph."""


@pytest.fixture(name="config")
def config_fixture():
    return TranslationConfig()


@pytest.fixture(name="tasks_config")
def tasks_config_fixture():
    return TasksConfig()


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD

"""Shared fixtures for core unit tests"""

import pytest

from mdview.core.parse import make_parser


SAMPLE_MD = """\
# Intro

Some *intro* text.

## Background

![diagram](images/diagram.png)

## Details

```python
print("hello")
```

# Conclusion

Done.
"""


@pytest.fixture(name="parser")
def parser_fixture():
    return make_parser("gfm-like")


@pytest.fixture(name="sample_tokens")
def sample_tokens_fixture(parser):
    return parser.parse(SAMPLE_MD)

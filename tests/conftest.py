import textwrap

import pytest


@pytest.fixture
def sample_text():
    """A small config touching every bit of supported syntax."""
    return textwrap.dedent("""
        ; global settings
        name = demo
        # unix comment

        [server]
        host = 127.0.0.1   ; inline comment
        port=8080
        url = http://example.com/path#frag
        expr = a=b=c

        [paths]
        root = /srv/app
        empty =
        """)

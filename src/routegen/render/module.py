from __future__ import annotations

import re
from pathlib import Path
from typing import Sequence

_FRAGMENT = re.compile(r"#.*")


def namespace_for(directory: str) -> str:
    # routes/issues -> Issues
    return Path(directory).name.capitalize()


def strip_fragment(url: str) -> str:
    return _FRAGMENT.sub("", url or "")


def render_module(
    namespace: str,
    documentation_url: str,
    stanzas: Sequence[str],
    client_module: str = "Octokit",
    client_class: str = "Client",
) -> str:
    """
    Wrap already ordered endpoint stanzas into the client module for one namespace.
    """
    body = "\n\n".join(stanzas)
    return (
        f"module {client_module}\n"
        f"  class {client_class}\n"
        f"    # Methods for the {namespace} API\n"
        f"    #\n"
        f"    # @see {strip_fragment(documentation_url)}\n"
        f"    module {namespace}\n"
        f"{body}\n"
        f"    end\n"
        f"  end\n"
        f"end\n"
    )

"""Entry-point analysis and wrapper synthesis.

* :mod:`~plugwire.entrypoint.analyzer` -- finds the top-level functions of
  the application's entry file that must remain callable.
* :mod:`~plugwire.entrypoint.synthesizer` -- writes the wrapper module that
  registers plugins before calling each of those functions.
"""

from plugwire.entrypoint.analyzer import find_entrypoints
from plugwire.entrypoint.synthesizer import create_entrypoint, module_reference

__all__ = ["create_entrypoint", "find_entrypoints", "module_reference"]

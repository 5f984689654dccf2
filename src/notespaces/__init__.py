"""Keeps short numbered notes in named, switchable spaces.

If you installed via ``pip``, run ``notespaces -h`` to get help.

To use the Python API, look at :class:`notespaces.api.Notespaces`
"""

"""Studio media staging service.

Stages rich-text editor images under a temporary prefix, promotes the ones a
saved article references into entity-scoped storage and sweeps the rest once
they outlive the retention window.
"""

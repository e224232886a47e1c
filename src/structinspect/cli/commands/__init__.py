# topmark:header:start
#
#   project      : StructInspect
#   file         : __init__.py
#   file_relpath : src/structinspect/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click subcommands of the StructInspect CLI (``version``, ``config``, ``rules``)."""

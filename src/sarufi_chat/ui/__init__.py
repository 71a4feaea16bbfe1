"""
sarufi-chat interactive terminal UI: ``src/sarufi_chat/ui/``.

Only ``app`` imports Textual. State, events, controller, renderer and runner
are plain Python and can be driven directly in tests.

Entry point::

    from sarufi_chat.ui.app import run
    run(gateway)
"""

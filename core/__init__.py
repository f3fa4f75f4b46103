"""Application shell: window management and input intents."""

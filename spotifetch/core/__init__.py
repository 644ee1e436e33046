"""
Core application logic for turning a pasted link into a download link.

The `LookupSession` is the coordinator: it validates input with the URL
normalizer, resolves it through the lookup client, records successes in the
history, and takes suggestions from the `ClipboardWatcher`.
"""

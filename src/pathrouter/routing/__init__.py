"""Routing — the declarative route table and the host's path trie.

Route descriptors are plain data declared once at startup. The trie is
used by the bundled ASGI host only; the request pipeline never matches
paths itself.
"""

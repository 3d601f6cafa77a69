"""
RIZY LAND API.

Backend for a children's reading app: a catalogue of books and audio
books, per-user libraries with reading progress, purchases and a small
merchandise shop. All state lives in an in-process ``MemStorage``
created by ``main.create_app()``.
"""

"""
Knowledge base behind the training chat.

Provides:
- Text extraction from TXT, PDF and DOCX uploads
- Normalization, tokenizing and sentence splitting
- Keyword-overlap answer matching over the ingested documents
"""

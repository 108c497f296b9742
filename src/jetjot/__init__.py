"""JetJot core: manuscript persistence, recents registry and JetPlot import.

A manuscript on disk is one folder:

    <manuscript>/
    ├── manuscript.json     # name, lastOpenDocumentId, document order + metadata
    └── <document-id>.txt   # raw UTF-8 body, one file per document
"""

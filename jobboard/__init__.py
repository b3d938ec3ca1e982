"""
Job Board core: document-store access and the listing query pipeline.
"""

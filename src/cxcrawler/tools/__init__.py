"""Network tools for cxcrawler."""

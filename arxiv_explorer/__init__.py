"""arXiv Explorer: search arXiv and rank papers by topical relevance."""

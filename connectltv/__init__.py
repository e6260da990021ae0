"""
ConnectLTV

Alumni directory search: free-text expertise queries in, ranked profile
records with a short relevance note out.

Philosophy:
- Live substring filtering against the hosted table, no index
- Ranking weights are data, not control flow
- Relevance text only restates what the record itself says
- "No matches" and "search failed" are never confused

Usage:
    from connectltv.common import load_config, build_record_store
    from connectltv.retriever import DirectorySearch
"""

__version__ = "0.1.0"

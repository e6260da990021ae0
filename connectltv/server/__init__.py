"""
Server - HTTP surface for directory search

Run with: python -m connectltv.server.app
"""

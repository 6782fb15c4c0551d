"""
Mermaid diagram and HTML page generation for open pull requests.
"""

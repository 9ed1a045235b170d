"""Core logic for JS Format Studio.

The Gradio UI lives in `app.py`. This package contains the pieces it drives:
- dialect detection for pasted JavaScript / JSX / TypeScript / TSX
- debounced format scheduling against the Prettier CLI
- formatter error interpretation
- line diffs between the input and the formatted output
"""

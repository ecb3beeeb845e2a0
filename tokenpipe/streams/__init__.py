"""
Pull-based token streams and the lookahead iterator built on top of them.
"""

"""
Stream processing core: frame decoding, fence extraction, session control
and the syntax advisory.
"""

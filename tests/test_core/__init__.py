"""
Core building block tests: banks, reshaping and the bit-index codec.
"""

"""
Builders assembling browsing views from parsed descriptors.
"""

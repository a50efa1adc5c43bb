"""
holds submodules related to modelling ribosome decision graphs
"""
__version__ = '1.0.0'

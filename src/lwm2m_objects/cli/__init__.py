"""
lwm2mctl command line interface.
"""

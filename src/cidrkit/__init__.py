"""
cidrkit - IPv4 Address Arithmetic Utilities

Conversions between 32-bit binary strings, dotted-decimal and CIDR
notation, and subnet boundary calculations for network engineers.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

__version__ = "0.1.0"
__author__ = "DNS Science.io"
__copyright__ = "Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company"

#!/usr/bin/env python3
"""
chksum - generate and verify file checksum manifests

Usage:
    chksum g [-f CHECKSUMS] [-a ALGORITHM] [-n NUM_THREADS] [-d DIR]... [-e EXCLUDE]...
    chksum v [-f CHECKSUMS] [-a ALGORITHM] [-n NUM_THREADS] [-q]
"""

import sys

from interfaces.cli import run


def main():
    sys.exit(run())


if __name__ == '__main__':
    main()

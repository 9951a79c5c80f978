#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Constants for simplog
"""

# Timestamp field, e.g. [2013-12-01 09:30:00]
DATE_FORMAT = "[%Y-%m-%d %H:%M:%S]"
DATE_WIDTH = 21

# Line wrapping
LINE_WIDTH = 80
TAB_SIZE = 8
# Expands to column 32, where the message body starts after "[date]\tLABEL : "
CONTINUATION_INDENT = " " * 30 + "\t"

# Keys accepted in key=value configuration files
CONFIG_KEYS = ["debug", "logfile", "silent", "wrap"]

TRUE_VALUES = ("1", "true", "yes", "on")
FALSE_VALUES = ("0", "false", "no", "off")

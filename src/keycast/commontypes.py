# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later


class KeycastError(Exception):
    pass


class ConfigurationError(KeycastError, ValueError):
    pass


class NotInContextError(KeycastError):
    def __init__(self):
        return super().__init__("Must be inside an appropriate context manager")

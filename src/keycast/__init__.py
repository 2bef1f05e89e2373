# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later

# Keystroke stages
# host level:
# stage 0: host-specific; watch a keyboard (Tk window, recording) and issue raw press/release/repeat events
# stage 1: track modifier keydown/up and snapshot the modifier flags onto each event
# stage 1.5: drop releases

# display level:
# stage 2: classify each key-down against the badge history (repeat, chord, chase, new combo)
# stage 3: project the history into render snapshots

#
# This file is part of scgi-run released under the MIT license.
# See the NOTICE for more information.

from scgirun.app import run

run()

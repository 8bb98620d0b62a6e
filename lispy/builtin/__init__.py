from lispy.builtin.ops import Builtin
from lispy.builtin.builtins import call_builtin

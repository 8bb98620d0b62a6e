from lispy.evaluation.read import read
from lispy.evaluation.evaluator import evaluate

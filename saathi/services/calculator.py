"""
Calculatrice scientifique : évaluation d'expressions et machine à états du clavier.

L'évaluation passe par un parcours d'AST en liste blanche (jamais `eval`) :
nombres, + - * / % ^, parenthèses, pi, e, sin/cos/tan, log (base 10), ln, sqrt.
Toute erreur ou tout résultat non fini donne la chaîne "Error".
"""
import ast
import math
import operator
import re
from typing import Callable, Dict

from saathi.models.calculator import AngleMode, CalculatorState

ERROR = "Error"
HISTORY_SIZE = 10

OPERATORS = ("+", "-", "*", "/", "^")
FUNCTION_KEYS = ("sin(", "cos(", "tan(", "log(", "ln(", "sqrt(")

_BIN_OPS: Dict[type, Callable[[float, float], float]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Mod: operator.mod,
    ast.Pow: operator.pow,
}
_UNARY_OPS = {ast.UAdd: operator.pos, ast.USub: operator.neg}
_CONSTANTS = {"pi": math.pi, "e": math.e}
_TRIG = {"sin": math.sin, "cos": math.cos, "tan": math.tan}
_FUNCTIONS = {"log10": math.log10, "ln": math.log, "sqrt": math.sqrt}


class _Evaluator:
    def __init__(self, angle_mode: AngleMode):
        self.degrees = angle_mode == AngleMode.deg

    def visit(self, node: ast.AST) -> float:
        if isinstance(node, ast.Expression):
            return self.visit(node.body)

        if isinstance(node, ast.Constant):
            if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
                raise ValueError(f"unsupported literal {node.value!r}")
            return float(node.value)

        if isinstance(node, ast.Name):
            if node.id not in _CONSTANTS:
                raise ValueError(f"unknown name {node.id}")
            return _CONSTANTS[node.id]

        if isinstance(node, ast.UnaryOp) and type(node.op) in _UNARY_OPS:
            return _UNARY_OPS[type(node.op)](self.visit(node.operand))

        if isinstance(node, ast.BinOp) and type(node.op) in _BIN_OPS:
            return _BIN_OPS[type(node.op)](self.visit(node.left), self.visit(node.right))

        if isinstance(node, ast.Call) and isinstance(node.func, ast.Name) and len(node.args) == 1 and not node.keywords:
            name = node.func.id
            arg = self.visit(node.args[0])
            if name in _TRIG:
                return _TRIG[name](math.radians(arg) if self.degrees else arg)
            if name in _FUNCTIONS:
                return _FUNCTIONS[name](arg)
            raise ValueError(f"unknown function {name}")

        raise ValueError(f"unsupported expression {ast.dump(node)}")


def auto_complete_brackets(expression: str) -> str:
    open_count = expression.count("(") - expression.count(")")
    return expression + ")" * max(0, open_count)


def to_python_syntax(expr: str) -> str:
    expression = auto_complete_brackets(expr)
    expression = expression.replace("π", "pi").replace("^", "**")
    # multiplication implicite : 2pi, 2e, pi2
    expression = re.sub(r"(\d)(pi|e)", r"\1*\2", expression)
    expression = re.sub(r"(pi|e)(\d)", r"\1*\2", expression)
    return re.sub(r"log\(", "log10(", expression)


def format_number(value: float) -> str:
    if value == int(value) and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def evaluate_expression(expr: str, angle_mode: AngleMode = AngleMode.deg) -> str:
    try:
        tree = ast.parse(to_python_syntax(expr), mode="eval")
        result = _Evaluator(angle_mode).visit(tree)
    except (SyntaxError, ValueError, TypeError, ArithmeticError, RecursionError):
        return ERROR

    if isinstance(result, complex) or not math.isfinite(result):
        return ERROR
    if result != 0 and abs(result) < 1e-10:
        return "0"

    scaled = result * 1e10
    rounded = math.floor(scaled + 0.5) / 1e10 if math.isfinite(scaled) else result
    return format_number(rounded)


# ---------- clavier ----------

def _is_blank(display: str) -> bool:
    return display in ("0", ERROR)


def _open_brackets(display: str) -> int:
    return display.count("(") - display.count(")")


def press(state: CalculatorState, key: str) -> CalculatorState:
    """
    Applique une touche à l'état de la calculatrice et renvoie le nouvel état.
    Lève ValueError pour une touche inconnue.
    """
    s = state.model_copy(deep=True)
    display = s.display
    last = display[-1:] if display else ""

    if key == "C":
        s.display = "0"
    elif key == "AC":
        s.display, s.history, s.memory = "0", [], 0
    elif key == "=":
        result = evaluate_expression(display, s.angleMode)
        if result != ERROR:
            s.history = [f"{display} = {result}"] + s.history[: HISTORY_SIZE - 1]
        s.display = result
    elif key == "MC":
        s.memory = 0
    elif key == "MR":
        mem = format_number(s.memory)
        s.display = mem if _is_blank(display) else display + mem
    elif key in ("M+", "M-"):
        result = evaluate_expression(display, s.angleMode)
        if result != ERROR:
            s.memory += float(result) if key == "M+" else -float(result)
    elif key in FUNCTION_KEYS:
        if _is_blank(display):
            s.display = key
        elif re.match(r"[\dπe)]", last):
            s.display = display + "*" + key
        else:
            s.display = display + key
    elif key in ("π", "e"):
        if _is_blank(display):
            s.display = key
        elif re.match(r"[\d)]", last):
            s.display = display + "*" + key
        else:
            s.display = display + key
    elif key == "⌫":
        s.display = display[:-1] if len(display) > 1 and display != ERROR else "0"
    elif key in OPERATORS:
        if _is_blank(display):
            if key == "-":
                s.display = "-"
        elif last in OPERATORS or last == "(":
            # pas deux opérateurs de suite, sauf un signe moins
            if key == "-" and last != "-":
                s.display = display + key
            elif last != "(":
                s.display = display[:-1] + key
        else:
            s.display = display + key
    elif key == ".":
        if _is_blank(display):
            s.display = "0."
        elif "." not in re.split(r"[+\-*/^()]", display)[-1]:
            s.display = display + "."
    elif key == "(":
        if _is_blank(display):
            s.display = "("
        elif re.match(r"[\d)πe]", last):
            s.display = display + "*("
        else:
            s.display = display + "("
    elif key == ")":
        if not _is_blank(display) and _open_brackets(display) > 0:
            s.display = display + ")"
    elif len(key) == 1 and key in "0123456789":
        s.display = key if _is_blank(display) else display + key
    else:
        raise ValueError(f"Unknown key: {key}")

    return s

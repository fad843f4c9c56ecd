"""
Tests for the JavaScript printer backend.
"""

from tests.test_utils import ident, num, stmt, var_decl
from sysreg.backends.javascript import print_js
from sysreg.shared.nodes import (
    ArrayExpression, ArrayPattern, ArrowFunctionExpression, AssignmentExpression,
    AssignmentPattern, AwaitExpression, BinaryExpression, BlockStatement, BreakStatement,
    CallExpression, CatchClause, ClassBody, ClassDeclaration, ConditionalExpression,
    ContinueStatement, DebuggerStatement, DoWhileStatement, ExportDefaultDeclaration,
    ExportNamedDeclaration, ExportSpecifier, ForInStatement, ForOfStatement, ForStatement,
    FunctionDeclaration, FunctionExpression, IfStatement, ImportDeclaration,
    ImportDefaultSpecifier, ImportSpecifier, LabeledStatement, Literal, LogicalExpression,
    MemberExpression, MethodDefinition, NewExpression, ObjectExpression, ObjectPattern,
    Program, Property, RestElement, ReturnStatement, SequenceExpression, SpreadElement,
    Super, SwitchCase, SwitchStatement, TaggedTemplateExpression, TemplateElement,
    TemplateLiteral, ThisExpression, TryStatement, UnaryExpression, UpdateExpression,
    VariableDeclaration, VariableDeclarator, WhileStatement, YieldExpression,
)


def _bin(op, left, right):
    return BinaryExpression(op, left, right)


def var_decl_of(pattern, init):
    return VariableDeclaration("let", [VariableDeclarator(pattern, init)])


class TestExpressions:

    def test_literals(self):
        assert print_js(Literal("a\"b")) == '"a\\"b"'
        assert print_js(Literal(True)) == "true"
        assert print_js(Literal(None)) == "null"
        assert print_js(Literal(2.0)) == "2"
        assert print_js(Literal(1.5)) == "1.5"
        assert print_js(Literal(255, raw="0xff")) == "0xff"

    def test_precedence_adds_parentheses(self):
        a, b, c = ident("a"), ident("b"), ident("c")
        assert print_js(_bin("*", _bin("+", a, b), c)) == "(a + b) * c"
        assert print_js(_bin("+", a, _bin("*", b, c))) == "a + b * c"
        assert print_js(_bin("-", a, _bin("-", b, c))) == "a - (b - c)"
        assert print_js(_bin("-", _bin("-", a, b), c)) == "a - b - c"
        assert print_js(_bin("**", a, _bin("**", b, c))) == "a ** b ** c"
        assert print_js(LogicalExpression("&&", LogicalExpression("||", a, b), c)) == "(a || b) && c"

    def test_sequence_in_arguments(self):
        seq = SequenceExpression([ident("a"), ident("b")])
        assert print_js(CallExpression(ident("f"), [seq, num(1)])) == "f((a, b), 1)"
        assert print_js(seq) == "a, b"

    def test_assignment_and_conditional(self):
        cond = ConditionalExpression(ident("t"), num(1), num(2))
        assert print_js(AssignmentExpression("=", ident("x"), cond)) == "x = t ? 1 : 2"
        nested = AssignmentExpression("=", ident("x"), AssignmentExpression("=", ident("y"), num(0)))
        assert print_js(nested) == "x = y = 0"

    def test_unary_and_update(self):
        assert print_js(UnaryExpression("typeof", ident("x"))) == "typeof x"
        assert print_js(UnaryExpression("!", ident("x"))) == "!x"
        assert print_js(UnaryExpression("-", UnaryExpression("-", ident("x")))) == "- -x"
        assert print_js(UpdateExpression("++", ident("x"), False)) == "x++"
        assert print_js(UpdateExpression("--", ident("x"), True)) == "--x"

    def test_member_access(self):
        assert print_js(MemberExpression(ident("m"), ident("a"))) == "m.a"
        assert print_js(MemberExpression(ident("m"), Literal("default"), True)) == 'm["default"]'
        callee = MemberExpression(CallExpression(ident("f"), []), ident("x"))
        assert print_js(callee) == "f().x"

    def test_new_with_call_callee(self):
        assert print_js(NewExpression(CallExpression(ident("f"), []), [])) == "new (f())()"
        assert print_js(NewExpression(ident("Foo"), [num(1)])) == "new Foo(1)"

    def test_arrays_and_objects(self):
        assert print_js(ArrayExpression([num(1), None, num(3)])) == "[1, , 3]"
        assert print_js(ObjectExpression([])) == "{}"
        obj = ObjectExpression([
            Property(ident("a"), num(1)),
            Property(Literal("b-c"), num(2)),
            Property(ident("d"), ident("d"), shorthand=True),
        ])
        assert print_js(obj) == '{\n  a: 1,\n  "b-c": 2,\n  d\n}'

    def test_functions(self):
        fn = FunctionExpression(None, [ident("a")], BlockStatement([ReturnStatement(ident("a"))]))
        assert print_js(fn) == "function (a) {\n  return a;\n}"
        named = FunctionExpression(ident("g"), [], BlockStatement())
        assert print_js(named) == "function g() {}"
        arrow = ArrowFunctionExpression([ident("x")], ObjectExpression([]), True)
        assert print_js(arrow) == "(x) => ({})"
        arrow = ArrowFunctionExpression([], _bin("+", ident("a"), num(1)), True)
        assert print_js(arrow) == "() => a + 1"


class TestStatements:

    def test_program_and_directive(self):
        from sysreg.shared.builders import directive
        program = Program([directive("use strict"), var_decl("a", num(1))])
        assert print_js(program) == '"use strict";\nvar a = 1;\n'
        assert print_js(Program()) == ""

    def test_leading_function_expression_is_wrapped(self):
        fn = FunctionExpression(None, [], BlockStatement())
        assert print_js(stmt(CallExpression(fn, []))) == "(function () {}());"
        assert print_js(stmt(ObjectExpression([]))) == "({});"
        assert print_js(stmt(CallExpression(ident("functionName"), []))) == "functionName();"

    def test_control_flow(self):
        body = BlockStatement([stmt(UpdateExpression("++", ident("i"), False))])
        loop = ForStatement(var_decl("i", num(0), kind="let"), _bin("<", ident("i"), num(3)), None, body)
        assert print_js(loop) == "for (let i = 0; i < 3; ) {\n  i++;\n}"
        for_in = ForInStatement(var_decl("k"), ident("o"), BlockStatement())
        assert print_js(for_in) == "for (var k in o) {}"
        guard = IfStatement(ident("a"), ReturnStatement(), BlockStatement([stmt(ident("b"))]))
        assert print_js(guard) == "if (a) return; else {\n  b;\n}"
        assert print_js(WhileStatement(Literal(True), BlockStatement())) == "while (true) {}"

    def test_class_with_methods(self):
        method = MethodDefinition(
            ident("get"), FunctionExpression(None, [], BlockStatement([ReturnStatement(ThisExpression())])),
        )
        static = MethodDefinition(ident("make"), FunctionExpression(None, [], BlockStatement()), static=True)
        cls = ClassDeclaration(ident("A"), ident("B"), ClassBody([method, static]))
        assert print_js(cls) == "class A extends B {\n  get() {\n    return this;\n  }\n  static make() {}\n}"

    def test_module_declarations(self):
        imp = ImportDeclaration(
            [ImportDefaultSpecifier(ident("d")), ImportSpecifier(ident("b"), ident("a"))],
            Literal("./dep"),
        )
        assert print_js(imp) == 'import d, {a as b} from "./dep";'
        assert print_js(ImportDeclaration([], Literal("./x"))) == 'import "./x";'
        exp = ExportNamedDeclaration(None, [ExportSpecifier(ident("a"), ident("b"))], Literal("./dep"))
        assert print_js(exp) == 'export {a as b} from "./dep";'
        assert print_js(ExportNamedDeclaration(var_decl("v", num(1)))) == "export var v = 1;"
        assert print_js(ExportDefaultDeclaration(num(1))) == "export default 1;"

    def test_loop_control(self):
        loop = WhileStatement(ident("go"), BlockStatement([
            IfStatement(ident("done"), BreakStatement()),
            ContinueStatement(ident("outer")),
        ]))
        labeled = LabeledStatement(ident("outer"), loop)
        assert print_js(labeled) == "outer: while (go) {\n  if (done) break;\n  continue outer;\n}"
        do = DoWhileStatement(BlockStatement([stmt(ident("a"))]), ident("b"))
        assert print_js(do) == "do {\n  a;\n} while (b);"
        for_of = ForOfStatement(var_decl("x", kind="const"), ident("xs"), BlockStatement())
        assert print_js(for_of) == "for (const x of xs) {}"
        assert print_js(DebuggerStatement()) == "debugger;"

    def test_switch(self):
        switch = SwitchStatement(ident("k"), [
            SwitchCase(num(1), [stmt(ident("a")), BreakStatement()]),
            SwitchCase(None, []),
        ])
        assert print_js(switch) == "switch (k) {\n  case 1:\n    a;\n    break;\n  default:\n}"

    def test_try(self):
        attempt = TryStatement(
            BlockStatement([stmt(ident("a"))]),
            CatchClause(ident("e"), BlockStatement()),
            BlockStatement([stmt(ident("b"))]),
        )
        assert print_js(attempt) == "try {\n  a;\n} catch (e) {} finally {\n  b;\n}"
        bare = TryStatement(BlockStatement(), CatchClause(None, BlockStatement()))
        assert print_js(bare) == "try {} catch {}"


class TestModernSyntax:

    def test_patterns(self):
        pattern = ObjectPattern([
            Property(ident("a"), ident("a"), shorthand=True),
            Property(ident("b"), AssignmentPattern(ident("c"), num(1))),
            Property(ident("d"), AssignmentPattern(ident("d"), num(2)), shorthand=True),
            RestElement(ident("rest")),
        ])
        assert print_js(var_decl_of(pattern, ident("o"))) == "let {a, b: c = 1, d = 2, ...rest} = o;"
        array = ArrayPattern([ident("x"), None, RestElement(ident("ys"))])
        assert print_js(var_decl_of(array, ident("o"))) == "let [x, , ...ys] = o;"
        assert print_js(ArrayPattern([ident("x"), None])) == "[x, ,]"

    def test_destructuring_assignment_statement_is_wrapped(self):
        pattern = ObjectPattern([Property(ident("a"), ident("a"), shorthand=True)])
        assert print_js(stmt(AssignmentExpression("=", pattern, ident("o")))) == "({a} = o);"

    def test_spread_and_rest(self):
        call = CallExpression(ident("f"), [SpreadElement(ident("args"))])
        assert print_js(call) == "f(...args)"
        fn = FunctionExpression(None, [RestElement(ident("xs"))], BlockStatement())
        assert print_js(fn) == "function (...xs) {}"
        assert print_js(ArrayExpression([SpreadElement(ident("a")), num(1)])) == "[...a, 1]"

    def test_templates(self):
        template = TemplateLiteral(
            [TemplateElement({"raw": "a ", "cooked": "a "}), TemplateElement({"raw": "!", "cooked": "!"}, True)],
            [_bin("+", ident("x"), num(1))],
        )
        assert print_js(template) == "`a ${x + 1}!`"
        tagged = TaggedTemplateExpression(MemberExpression(ident("String"), ident("raw")), template)
        assert print_js(tagged) == "String.raw`a ${x + 1}!`"
        cooked = TemplateLiteral([TemplateElement({"raw": None, "cooked": "`${"}, True)])
        assert print_js(cooked) == "`\\`\\${`"

    def test_async_and_generators(self):
        fn = FunctionDeclaration(ident("f"), [], BlockStatement([
            stmt(AwaitExpression(CallExpression(ident("g"), []))),
        ]), async_=True)
        assert print_js(fn) == "async function f() {\n  await g();\n}"
        gen = FunctionExpression(None, [], BlockStatement([
            stmt(YieldExpression(ident("a"))),
            stmt(YieldExpression(ident("b"), delegate=True)),
        ]), generator=True)
        assert print_js(gen) == "function* () {\n  yield a;\n  yield* b;\n}"
        arrow = ArrowFunctionExpression([], AwaitExpression(ident("p")), True, async_=True)
        assert print_js(arrow) == "async () => await p"
        assert print_js(stmt(FunctionExpression(None, [], BlockStatement(), async_=True))) == "(async function () {});"

    def test_methods(self):
        method = MethodDefinition(ident("run"), FunctionExpression(None, [], BlockStatement(), async_=True))
        gen = MethodDefinition(ident("items"), FunctionExpression(None, [], BlockStatement(), generator=True))
        cls = ClassDeclaration(ident("A"), ident("B"), ClassBody([method, gen]))
        assert print_js(cls) == "class A extends B {\n  async run() {}\n  *items() {}\n}"
        call = CallExpression(MemberExpression(Super(), ident("run")), [])
        assert print_js(call) == "super.run()"

    def test_regex_literal(self):
        regex = Literal({}, raw="/a+/g", regex={"pattern": "a+", "flags": "g"})
        assert print_js(regex) == "/a+/g"

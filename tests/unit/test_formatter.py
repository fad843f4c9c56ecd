"""
End-to-end formatting: syntax tree in, printed System.register call out.
"""

from tests.test_utils import (
    add, export_default, export_list, export_var, format_module, format_modules,
    ident, import_bare, import_default, import_named, import_namespace, lines,
    make_table, num, stmt, var_decl,
)
from sysreg.backends.javascript import print_js
from sysreg.shared.nodes import (
    AssignmentExpression, BlockStatement, CallExpression, ClassDeclaration,
    ExportNamedDeclaration, FunctionDeclaration, MemberExpression, ObjectExpression,
    Property, ReturnStatement, UpdateExpression, VariableDeclaration, VariableDeclarator,
)


def _postfix(operator, name):
    return UpdateExpression(operator, ident(name), False)


class TestRegistrationShape:

    def test_module_without_imports_or_exports(self):
        out = format_module([])
        assert out == (
            'System.register("main", [], function (__es6_export__) {\n'
            '  return {\n'
            '    setters: [],\n'
            '    execute: function () {\n'
            '      "use strict";\n'
            '    }\n'
            '  };\n'
            '});\n'
        )

    def test_anonymous_default_function(self):
        fn = FunctionDeclaration(
            None, [ident("a"), ident("b")],
            BlockStatement([ReturnStatement(add(ident("a"), ident("b")))]),
        )
        out = format_module([export_default(fn)], name="1")
        assert out == (
            'System.register("1", [], function (__es6_export__) {\n'
            '  return {\n'
            '    setters: [],\n'
            '    execute: function () {\n'
            '      "use strict";\n'
            '      __es6_export__("default", function (a, b) {\n'
            '        return a + b;\n'
            '      });\n'
            '    }\n'
            '  };\n'
            '});\n'
        )
        assert out.count("__es6_export__(") == 1
        assert "var " not in out

    def test_anonymous_mode_omits_name(self, anonymous_formatter):
        out = format_modules({"main": [export_var("a", num(1))]}, anonymous_formatter)["main"]
        assert out.startswith("System.register([], function (__es6_export__) {\n")

    def test_program_filename_is_relative_path(self, formatter):
        table = make_table({"lib/a": []})
        module = table.get_module("lib/a")
        program = formatter.format_module(module)
        assert program is module.ast
        assert program.filename == "lib/a.js"
        assert len(program.body) == 1


class TestCircularModules:

    def test_both_modules_get_aligned_setters(self):
        out = format_modules({
            "a": [
                import_named("./b", "y"),
                export_var("x", num(1)),
                stmt(AssignmentExpression("=", ident("x"), add(ident("y"), num(1)))),
                stmt(_postfix("++", "x")),
            ],
            "b": [
                import_named("./a", "x"),
                export_var("y", num(2)),
            ],
        })
        assert out["a"] == (
            'System.register("a", ["./b"], function (__es6_export__) {\n'
            '  var y;\n'
            '  function b$$(m) {\n'
            '    y = m.y;\n'
            '  }\n'
            '  return {\n'
            '    setters: [b$$],\n'
            '    execute: function () {\n'
            '      "use strict";\n'
            '      var x = __es6_export__("x", 1);\n'
            '      __es6_export__("x", x = y + 1);\n'
            '      __es6_export__("x", x + 1), x++;\n'
            '    }\n'
            '  };\n'
            '});\n'
        )
        assert out["b"] == (
            'System.register("b", ["./a"], function (__es6_export__) {\n'
            '  var x;\n'
            '  function a$$(m) {\n'
            '    x = m.x;\n'
            '  }\n'
            '  return {\n'
            '    setters: [a$$],\n'
            '    execute: function () {\n'
            '      "use strict";\n'
            '      var y = __es6_export__("y", 2);\n'
            '    }\n'
            '  };\n'
            '});\n'
        )


class TestExportForms:

    def test_variable_with_initializers(self):
        decl = VariableDeclaration("var", [
            VariableDeclarator(ident("a"), num(1)),
            VariableDeclarator(ident("b")),
        ])
        out = format_module([ExportNamedDeclaration(decl)])
        assert 'var a = __es6_export__("a", 1), b;' in lines(out)

    def test_variable_without_initializer(self):
        out = format_module([export_var("a", kind="let")])
        assert "let a;" in lines(out)
        assert "__es6_export__(" not in out.split("execute")[1]

    def test_function_declaration(self):
        out = format_module([ExportNamedDeclaration(FunctionDeclaration(ident("f")))])
        body = lines(out)
        assert body.index("function f() {}") + 1 == body.index('__es6_export__("f", f);')

    def test_class_declaration(self):
        out = format_module([ExportNamedDeclaration(ClassDeclaration(ident("C")))])
        body = lines(out)
        assert body.index("class C {}") + 1 == body.index('__es6_export__("C", C);')

    def test_named_default_function(self):
        fn = FunctionDeclaration(ident("f"), [], BlockStatement([ReturnStatement(num(1))]))
        out = format_module([export_default(fn)])
        body = lines(out)
        assert "function f() {" in body
        assert body.index("return 1;") < body.index('__es6_export__("default", f);')

    def test_anonymous_default_class(self):
        out = format_module([export_default(ClassDeclaration(None))])
        assert '__es6_export__("default", class {});' in lines(out)

    def test_default_expression(self):
        out = format_module([export_default(ObjectExpression([Property(ident("a"), num(1))]))])
        assert (
            '      __es6_export__("default", {\n'
            '        a: 1\n'
            '      });\n'
        ) in out

    def test_bare_specifier_list(self):
        out = format_module([
            var_decl("a", num(1)),
            var_decl("b", num(2)),
            export_list("a", ("b", "c")),
        ])
        body = lines(out)
        start = body.index('"use strict";')
        assert body[start + 1:start + 5] == [
            "var a = 1;",
            "var b = 2;",
            '__es6_export__("a", a);',
            '__es6_export__("c", b);',
        ]
        assert "setters: []," in body
        assert "(m)" not in out

    def test_sourced_specifier_list_is_erased(self):
        out = format_module([export_list(("a", "b"), source="./dep")], dep=[export_var("a", num(1))])
        assert out == (
            'System.register("main", ["./dep"], function (__es6_export__) {\n'
            '  function dep$$(m) {\n'
            '    __es6_export__("b", m["a"]);\n'
            '  }\n'
            '  return {\n'
            '    setters: [dep$$],\n'
            '    execute: function () {\n'
            '      "use strict";\n'
            '    }\n'
            '  };\n'
            '});\n'
        )


class TestImportForms:

    def test_namespace_import_assigns_whole_module(self):
        call = CallExpression(MemberExpression(ident("ns"), ident("f")), [])
        out = format_module([import_namespace("./m", "ns"), stmt(call)], m=[])
        body = lines(out)
        assert "var ns;" in body
        assert "function m$$(m) {" in body
        assert "ns = m;" in body
        assert "ns.f();" in body

    def test_default_import_uses_computed_key(self):
        out = format_module([import_default("./dep", "d")], dep=[])
        assert 'd = m["default"];' in lines(out)

    def test_reserved_import_key_uses_computed_key(self):
        out = format_module([import_named("./dep", ("class", "klass"))], dep=[])
        assert 'klass = m["class"];' in lines(out)

    def test_renamed_import(self):
        out = format_module([import_named("./dep", ("a", "b"))], dep=[])
        assert "var b;" in lines(out)
        assert "b = m.a;" in lines(out)

    def test_side_effect_import_gets_empty_setter(self):
        out = format_module([import_bare("./polyfill")], polyfill=[])
        assert 'System.register("main", ["./polyfill"], ' in out
        assert "function polyfill$$(m) {}" in lines(out)
        assert "setters: [polyfill$$]," in lines(out)
        assert "var " not in out

    def test_imports_are_erased_in_order(self):
        out = format_module([
            var_decl("a", num(1)),
            import_named("./dep", "x"),
            var_decl("b", num(2)),
        ], dep=[])
        body = lines(out)
        assert "import" not in out
        assert body.index("var a = 1;") + 1 == body.index("var b = 2;")

    def test_import_and_reexport_share_one_dependency(self):
        out = format_module(
            [import_named("./dep", "a"), export_list("c", source="./dep.js")],
            dep=[],
        )
        assert 'System.register("main", ["./dep"], ' in out
        assert out.count("function dep$$(m)") == 1
        body = lines(out)
        assert body.index("a = m.a;") + 1 == body.index('__es6_export__("c", m["c"]);')

    def test_setters_follow_dependency_order(self):
        out = format_modules({
            "main": [
                export_list("x", source="./b"),
                import_named("./a", "y"),
            ],
            "a": [],
            "b": [],
        })["main"]
        assert 'System.register("main", ["./a", "./b"], ' in out
        assert "setters: [a$$, b$$]," in lines(out)
        body = lines(out)
        assert body.index("function a$$(m) {") < body.index("function b$$(m) {")

    def test_setter_parameter_avoids_import_names(self):
        use = CallExpression(ident("use"), [ident("m")])
        out = format_module(
            [import_default("./m", "m"), import_named("./m", ("a", "m$")), stmt(use)],
            m=[],
        )
        body = lines(out)
        assert "var m, m$;" in body
        assert "function m$$(m$$) {" in body
        assert 'm = m$$["default"];' in body
        assert "m$ = m$$.a;" in body
        assert "use(m);" in body

    def test_nested_module_ids(self):
        out = format_modules({
            "lib/main": [import_named("../util/strings", "pad")],
            "util/strings": [],
        })["lib/main"]
        assert 'System.register("lib/main", ["../util/strings"], ' in out
        assert "function util$strings$$(m) {" in lines(out)


class TestFormatterIsolation:

    def test_formatting_does_not_touch_dependencies(self, formatter):
        table = make_table({"main": [import_named("./dep", "a")], "dep": [export_var("a", num(1))]})
        dep = table.get_module("dep")
        before = list(dep.ast.body)
        formatter.format_module(table.get_module("main"))
        assert dep.ast.body == before

    def test_modules_format_in_any_order(self, formatter):
        modules = {
            "a": [import_named("./b", "y"), export_var("x", num(1))],
            "b": [import_named("./a", "x"), export_var("y", num(2))],
        }
        forward = format_modules(modules)
        table = make_table({
            "a": [import_named("./b", "y"), export_var("x", num(1))],
            "b": [import_named("./a", "x"), export_var("y", num(2))],
        })
        backward = {m.name: print_js(formatter.format_module(m)) for m in reversed(table.modules)}
        assert forward == backward

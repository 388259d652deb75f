import pytest

from action_controller import controller
from action_controller.action import Action, status_phrase
from action_controller.controller import Controller
from action_controller.core.configuration import Configuration, include


class CustomAction:
    pass


class Greeting:
    def call(self, params):
        return [200, {}, [f"Hello {params.get('name', 'world')}"]]


class Teapot:
    def status(self):
        return 418


def test_subclass_binds_process_wide_configuration():
    class Index(Action):
        def call(self, params):
            return [200, {}, ["Index"]]

    assert Index.configuration is controller.configuration
    assert Index()() == [200, {}, ["Index"]]


def test_subclass_keeps_explicit_configuration():
    configuration = Configuration()

    class Index(Action):
        pass

    Index.configuration = configuration

    class Nested(Index):
        pass

    assert Nested.configuration is configuration


def test_call_must_be_implemented():
    class Empty(Action):
        pass

    with pytest.raises(NotImplementedError):
        Empty().call({})


def test_params_default_to_empty_dict():
    class Echo(Action):
        def call(self, params):
            return [200, {}, [params]]

    assert Echo()() == [200, {}, [{}]]


class TestExceptionHandling:
    @pytest.fixture
    def failing(self):
        class Failing(Action):
            def call(self, params):
                raise params["error"]

        return Failing()

    def test_registered_exception_uses_configured_code(self, failing):
        controller.configuration.handle_exception(ValueError, 400)
        assert failing({"error": ValueError("bad")}) == [400, {}, ["Bad Request"]]

    def test_unknown_exception_uses_default_code(self, failing):
        assert failing({"error": RuntimeError("boom")}) == [500, {}, ["Internal Server Error"]]

    def test_exceptions_propagate_when_disabled(self, failing):
        controller.configure(handle_exceptions=False)
        with pytest.raises(RuntimeError, match="boom"):
            failing({"error": RuntimeError("boom")})

    def test_non_standard_code_uses_number_as_body(self, failing):
        controller.configuration.handle_exception(ValueError, 318)
        assert failing({"error": ValueError("bad")}) == [318, {}, ["318"]]


def test_unbound_action_uses_process_wide_configuration():
    controller.configuration.register_format("json", "application/json")

    assert Action.configuration is None
    assert Action.current_configuration() is controller.configuration
    assert Action.format_for("application/json") == "json"
    assert Action()() == [500, {}, ["Internal Server Error"]]


def test_status_phrase():
    assert status_phrase(404) == "Not Found"
    assert status_phrase(599) == "599"


def test_format_for_delegates_to_configuration():
    controller.configuration.register_format("json", "application/json")

    class Show(Action):
        pass

    assert Show.format_for("application/json") == "json"
    assert Show.format_for("text/html") == "html"
    assert Show.format_for("text/csv") is None


class TestController:
    def test_fresh_configuration_by_default(self):
        assert Controller().configuration == Configuration()
        assert Controller().configuration is not controller.configuration

    def test_configure_is_chainable(self):
        app = Controller().configure(handle_exceptions=False).configure(formats={"json": "application/json"})
        assert app.configuration.handle_exceptions is False
        assert app.configuration.format_for("application/json") == "json"

    def test_action_extends_action_module(self):
        app = Controller()

        @app.action
        class Hello(Greeting):
            """Says hello."""

        assert issubclass(Hello, Action)
        assert issubclass(Hello, Greeting)
        assert Hello.__name__ == "Hello"
        assert Hello.__doc__ == "Says hello."
        assert Hello.configuration is app.configuration
        assert Hello()({"name": "friend"}) == [200, {}, ["Hello friend"]]

    def test_action_uses_configured_action_module(self):
        app = Controller().configure(action_module=CustomAction)

        @app.action
        class Hello(Greeting):
            pass

        assert issubclass(Hello, CustomAction)
        assert not issubclass(Hello, Action)

    def test_action_applies_module_blocks(self):
        app = Controller()

        @app.configuration.module
        def with_status(action):
            action.status_code = 202

        app.configuration.module(include(Teapot))

        @app.action
        class Hello(Greeting):
            pass

        assert Hello.status_code == 202
        assert Hello().status() == 418
        assert Hello.configuration is app.configuration

    def test_action_methods_win_over_module_blocks(self):
        app = Controller()
        app.configuration.module(include(Teapot))

        @app.action
        class Hello(Greeting):
            def status(self):
                return 200

            def call(self, params):
                return [self.status(), {}, ["Hello"]]

        assert Hello()({}) == [200, {}, ["Hello"]]

    def test_module_blocks_win_over_action_module(self):
        class Base:
            def status(self):
                return 500

        app = Controller().configure(action_module=Base, modules=[include(Teapot)])

        @app.action
        class Hello(Greeting):
            pass

        assert Hello().status() == 418
        assert Hello.__mro__.index(Teapot) < Hello.__mro__.index(Base)

    def test_action_accepts_existing_action_subclass(self):
        app = Controller()

        @app.action
        class Hello(Action):
            def call(self, params):
                return [200, {}, ["Hello"]]

        assert Hello.__mro__.count(Action) == 1
        assert Hello.configuration is app.configuration

    def test_duplicate_is_independent(self):
        app = Controller().configure(handle_exception={ValueError: 400})
        other = app.duplicate()

        other.configure(handle_exceptions=False, handle_exception={KeyError: 404})

        assert other.configuration.handled_exceptions == {ValueError: 400, KeyError: 404}
        assert app.configuration.handled_exceptions == {ValueError: 400}
        assert app.configuration.handle_exceptions is True


class TestProcessWideDefaults:
    def test_configure(self):
        returned = controller.configure(handle_exception={ValueError: 400})
        assert returned is controller.configuration
        assert controller.configuration.exception_code(ValueError) == 400

    def test_duplicate(self):
        controller.configure(formats={"json": "application/json"})
        copy = controller.duplicate()

        copy.register_format("xml", "application/xml")

        assert copy.format_for("application/json") == "json"
        assert controller.configuration.format_for("application/xml") is None

    def test_reset(self):
        controller.configure(handle_exceptions=False, formats={"json": "application/json"})
        controller.reset()
        assert controller.configuration == Configuration()

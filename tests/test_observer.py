"""Tests for Observer and observe()."""

import logging

from snapstate import CounterModel, Observer, ThemeModel, UserModel, app_scope, observe, read, watch


class TestObserver:
    def test_observe_builds_once(self):
        s = app_scope()
        view = observe(lambda o: watch(s, CounterModel, o))
        assert view.rebuild_count == 1
        assert view.output == 0

    def test_observer_does_not_build_until_run(self):
        obs = Observer(lambda o: "built")
        assert obs.output is None
        assert obs.run() == "built"
        assert obs.output == "built"

    def test_name_defaults_to_build_function(self):
        def header(obs):
            return None

        assert Observer(header).name == "header"
        assert Observer(header, name="top").name == "top"

    def test_rewatch_keeps_one_subscription(self):
        s = app_scope()
        view = observe(lambda o: watch(s, CounterModel, o))
        counter = read(s, CounterModel)
        for _ in range(5):
            counter.increment()
        assert len(counter.listeners) == 1
        assert view.rebuild_count == 6
        assert view.output == 5

    def test_watch_twice_in_one_build(self):
        s = app_scope()
        view = observe(lambda o: (watch(s, ThemeModel, o), watch(s, ThemeModel, o)))
        read(s, ThemeModel).toggle()
        assert view.rebuild_count == 2
        assert view.output == (True, True)

    def test_stays_subscribed_when_build_stops_watching(self):
        # Subscriptions persist until dispose, even if a rebuild skips watch().
        s = app_scope()
        calls = []

        def build(obs):
            calls.append(1)
            if len(calls) == 1:
                watch(s, CounterModel, obs)

        observe(build)
        read(s, CounterModel).increment()
        read(s, CounterModel).increment()
        assert len(calls) == 3


class TestDispose:
    def test_removes_all_subscriptions(self):
        s = app_scope()
        view = observe(lambda o: (watch(s, UserModel, o), watch(s, ThemeModel, o)))
        view.dispose()
        assert len(read(s, UserModel).listeners) == 0
        assert len(read(s, ThemeModel).listeners) == 0
        assert view.disposed
        assert view.watching == []

    def test_idempotent(self):
        view = observe(lambda o: None)
        view.dispose()
        view.dispose()
        assert view.run() is None

    def test_watch_after_dispose_does_not_subscribe(self):
        s = app_scope()
        obs = Observer(lambda o: None)
        obs.dispose()
        assert watch(s, CounterModel, obs) == 0
        assert len(read(s, CounterModel).listeners) == 0

    def test_dispose_sibling_during_pass(self):
        s = app_scope()
        views = {}

        def first(obs):
            watch(s, CounterModel, obs)
            if "second" in views and read(s, CounterModel).count > 0:
                views["second"].dispose()

        def second(obs):
            watch(s, CounterModel, obs)

        views["first"] = observe(first)
        views["second"] = observe(second)
        read(s, CounterModel).increment()
        assert views["first"].rebuild_count == 2
        assert views["second"].rebuild_count == 1

    def test_dispose_self_during_rebuild(self):
        s = app_scope()

        def build(obs):
            count = watch(s, CounterModel, obs)
            if count >= 2:
                obs.dispose()
            return count

        view = observe(build)
        counter = read(s, CounterModel)
        counter.increment()
        counter.increment()
        counter.increment()
        assert view.output == 2
        assert view.rebuild_count == 3
        assert len(counter.listeners) == 0

    def test_logs(self, caplog):
        s = app_scope()
        with caplog.at_level(logging.DEBUG, logger="snapstate.observer"):
            view = observe(lambda o: watch(s, CounterModel, o), name="label")
            view.dispose()
        assert "label: watching" in caplog.text
        assert "label: disposed" in caplog.text

    def test_repr(self):
        view = observe(lambda o: None, name="x")
        assert repr(view) == "Observer(x, active)"
        view.dispose()
        assert repr(view) == "Observer(x, disposed)"

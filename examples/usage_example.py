"""
fsm-engine usage example
"""
import logging

from fsm_engine import Handler, StateMachineTemplate, TemplateParser, TransitionFailed, inherit_template


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


class Counter(Handler):
    """Counts to a target, passing through the transient 'counting' state"""

    template = StateMachineTemplate()
    template.declare_state('initial', initial=True)
    template.declare_state('counting', transient=True)
    template.declare_state('final', final=True)

    @template.define_transitions
    def _transitions(root):
        root.from_('initial').goto('counting').do(lambda self: setattr(self, 'counter', 0))
        root.from_('counting').if_('done').goto('final') \
            .else_().do(lambda self: setattr(self, 'counter', self.counter + 1)).stay()

    @template.register_hook
    def _trace(self, phase, transition, *args):
        prefix = '[START]' if phase == 'before' else '[END]'
        print(f"{prefix} In transition {transition.source} ~> {transition.target}")

    def __init__(self, target=5):
        self.target = target
        self.counter = None

    def done(self):
        return self.counter >= self.target

    def on_finish(self):
        print(f"Finished with counter {self.counter}")


class SubPlans(Handler):
    """Waits for sub plans to report back, failing when one of them failed"""

    template = StateMachineTemplate()
    template.declare_state('initial', initial=True)
    template.declare_state('waiting')
    template.declare_state('done', final=True)
    template.declare_state('error', final=True)
    template.declare_state('spawned', transient=True)
    template.declare_state('sub_plan_finished', transient=True)

    @template.define_transitions
    def _transitions(root):
        root.from_('initial').do('spawn').goto('spawned')
        root.from_('spawned', lambda spawned: spawned.if_('all_done').goto('done')
                   .else_().goto('waiting'))
        root.from_('sub_plan_finished', lambda finished: (
            finished.unless('all_done').goto('waiting'),
            finished.if_(lambda self, *_: self.all_done() and self.failed == 0).goto('done')
                    .elsif(lambda self, *_: self.all_done() and self.failed > 0)
                    .do(lambda self, *_: self.fail('A sub plan failed')).goto('error')
        ))
        root.from_('waiting').if_(lambda self, event: event is not None) \
            .do('mark_finished').goto('sub_plan_finished')

    def __init__(self, count):
        self.count = count
        self.pending = 0
        self.failed = 0

    def spawn(self, *_):
        self.pending = self.count

    def all_done(self, *_):
        return self.pending == 0

    def mark_finished(self, success):
        self.pending -= 1
        if not success:
            self.failed += 1


def example_counter():
    """Counter example"""
    print("\n=== Counter ===")
    counter = Counter(target=3)
    result = counter.run()
    print(f"State: {counter.current_state}, steps: {result.steps}")
    counter.step()


def example_sub_plans():
    """Persisted sub plan example"""
    print("\n=== Sub plans ===")
    handler = SubPlans(count=2)
    control = {}
    print(f"Suspended: {handler.resume(control)}, saved: {control['saved']}")
    for success in (True, False):
        try:
            suspended = handler.resume(control, success)
        except TransitionFailed as e:
            print(f"Failed: {e}, saved: {control['saved']}")
            break
        print(f"Suspended: {suspended}, saved: {control['saved']}")


def example_declarative():
    """Template loaded from YAML and rendered as Graphviz"""
    print("\n=== Declarative template ===")
    template = TemplateParser().parse_string("""
template:
  states:
    - {name: draft, initial: true}
    - {name: review}
    - {name: published, final: true}
  transitions:
    - {from: draft, to: review, if: submitted}
    - {from: review, to: published, if: approved}
    - {from: review, to: draft, unless: approved}
""")
    print(template.draw())

    strict = inherit_template(template)
    strict.declare_transition('review', 'draft', disable=True)
    print(strict.draw())


if __name__ == "__main__":
    example_counter()
    example_sub_plans()
    example_declarative()

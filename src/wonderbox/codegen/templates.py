from textwrap import dedent

AUTORESOLVE_TEMPLATE = dedent(
    '''
    def autoresolve(cls, container):
        """Generated by {{ generator }} for {{ qualname }}.{{ constructor_name }}."""
    {% for dependency in dependencies %}
        {{ dependency.variable }} = container.try_resolve({{ dependency.key_global }})
        if {{ dependency.variable }} is None:
            return None
    {% endfor %}
        return {{ call_target }}({{ arguments }})
    ''',
).strip()

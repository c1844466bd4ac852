from __future__ import annotations

from trainingdemo.content_management.shell import Shell, StartupBase
from trainingdemo.person.drivers import PersonPartDisplayDriver
from trainingdemo.person.indexes import PersonPartIndexProvider
from trainingdemo.person.models import PersonPart


class PersonStartup(StartupBase):
    def configure(self, shell: Shell) -> None:
        shell.add_part(PersonPart)
        shell.add_driver(PersonPartDisplayDriver())
        shell.add_index_provider(PersonPartIndexProvider())


class PersonGraphQLStartup(StartupBase):
    required_features = ("graphql",)

    def configure(self, shell: Shell) -> None:
        from trainingdemo.person.graphql import register_person_graphql

        register_person_graphql(shell.registrar)


STARTUPS = (PersonStartup(), PersonGraphQLStartup())

from ariadne import make_executable_schema

from tourhub.gql.type_defs import type_defs
from tourhub.gql.resolvers import query, mutation

schema = make_executable_schema(type_defs, query, mutation, convert_names_case=True)

# Wire schemas shared by the GraphQL resolvers and the client

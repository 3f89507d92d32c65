"""GraphQL SDL for the favorites API and the collaborator types it references."""

base_type_defs = """
    type User {
        id: ID!
        email: String!
        role: String
    }

    type Tour {
        id: ID!
        title: String!
        price: Float!
        location: String
        images: [String]
        status: String
        isDeleted: Boolean
    }

    type Query {
        me: User
    }

    type Mutation
"""

favorite_type_defs = """
    type Favorite {
        id: ID!
        user: User!
        tour: Tour!
        isDeleted: Boolean
        order: Int
        createdAt: String!
        updatedAt: String!
    }

    type FavoriteResponse {
        success: Boolean!
        message: String!
        favorite: Favorite
    }

    type FavoritesListResponse {
        success: Boolean!
        message: String!
        favorites: [Favorite!]!
        total: Int!
    }

    type ReorderResponse {
        success: Boolean!
        message: String!
        favorites: [Favorite!]!
    }

    extend type Query {
        getFavorites(limit: Int, offset: Int): FavoritesListResponse!
        isFavorite(tourId: ID!): Boolean!
        getTourFavorites(tourId: ID!): FavoritesListResponse!
    }

    extend type Mutation {
        addToFavorites(tourId: ID!): FavoriteResponse!
        removeFromFavorites(tourId: ID!): FavoriteResponse!
        toggleFavorite(tourId: ID!): FavoriteResponse!
        reorderFavorites(favoriteIds: [ID!]!): ReorderResponse!
    }
"""

type_defs = [base_type_defs, favorite_type_defs]

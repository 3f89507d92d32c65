"""GraphQL documents used by the favorites client."""

FAVORITE_FIELDS = """
    fragment FavoriteFields on Favorite {
        id
        isDeleted
        order
        createdAt
        updatedAt
        user { id email role }
        tour { id title price location images status isDeleted }
    }
"""

GET_FAVORITES = """
    query GetFavorites($limit: Int, $offset: Int) {
        getFavorites(limit: $limit, offset: $offset) {
            success
            message
            total
            favorites { ...FavoriteFields }
        }
    }
""" + FAVORITE_FIELDS

IS_FAVORITE = """
    query IsFavorite($tourId: ID!) {
        isFavorite(tourId: $tourId)
    }
"""

GET_TOUR_FAVORITES = """
    query GetTourFavorites($tourId: ID!) {
        getTourFavorites(tourId: $tourId) {
            success
            message
            total
            favorites { ...FavoriteFields }
        }
    }
""" + FAVORITE_FIELDS

ADD_TO_FAVORITES = """
    mutation AddToFavorites($tourId: ID!) {
        addToFavorites(tourId: $tourId) {
            success
            message
            favorite { ...FavoriteFields }
        }
    }
""" + FAVORITE_FIELDS

REMOVE_FROM_FAVORITES = """
    mutation RemoveFromFavorites($tourId: ID!) {
        removeFromFavorites(tourId: $tourId) {
            success
            message
            favorite { ...FavoriteFields }
        }
    }
""" + FAVORITE_FIELDS

TOGGLE_FAVORITE = """
    mutation ToggleFavorite($tourId: ID!) {
        toggleFavorite(tourId: $tourId) {
            success
            message
            favorite { ...FavoriteFields }
        }
    }
""" + FAVORITE_FIELDS

REORDER_FAVORITES = """
    mutation ReorderFavorites($favoriteIds: [ID!]!) {
        reorderFavorites(favoriteIds: $favoriteIds) {
            success
            message
            favorites { ...FavoriteFields }
        }
    }
""" + FAVORITE_FIELDS

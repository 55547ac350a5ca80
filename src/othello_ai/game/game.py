from abc import ABC, abstractmethod


class Game(ABC):
    """
    Abstract Base Class for a two-player board game searched by the engines.
    """

    @abstractmethod
    def get_initial_state(self):
        """
        Returns the initial state of the game.
        """
        pass

    @abstractmethod
    def get_next_state(self, state, action, player):
        """
        Returns the next state given the current state, action, and player.
        """
        pass

    @abstractmethod
    def get_valid_moves(self, state, player):
        """
        Returns a binary mask of valid moves for the player to move.
        """
        pass

    @abstractmethod
    def get_legal_moves(self, state, player):
        """
        Returns the list of legal actions for the player to move.
        """
        pass

    @abstractmethod
    def is_terminal(self, state):
        """
        Returns True when neither side can move.
        """
        pass

    @abstractmethod
    def get_value_and_terminated(self, state, player):
        """
        Returns the value of the state from the player's perspective
        (1 for win, 0 for draw or unfinished, -1 for loss) and whether the
        game has terminated.
        """
        pass

    @abstractmethod
    def get_opponent(self, player):
        """
        Returns the opponent of the current player.
        """
        pass

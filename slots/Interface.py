from slots.Core import Core, GameEvent


class Interface:

    def __init__(self):
        self.core: Core = None

    def onStart(self):
        pass

    def onEvent(self, event: GameEvent):
        """
        Invoked when a game event is performed.
        :param event:
        :return:
        """
        self.notifyRedraw()
        pass

    def notifyRedraw(self):
        pass

    def onGameOver(self):
        pass

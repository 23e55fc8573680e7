from prompt_toolkit.completion import WordCompleter

from toyl.classes import Constants

# words offered by <Tab> in the shell
toyl_words = list(Constants.KEYWORD) + [
    ### shell commands ###
    'echo', 'trace', 'log', 'run', 'tree', 'help', 'exit', 'quit',
]

toyl_completer = WordCompleter(toyl_words, ignore_case=True)  # case-insensitive

help_help = [
    "\n" + "=" * 30,
    "[Program format]",
    "  declare : int a = 3;",
    "  assign  : a = a + 4;",
    "  print   : print(a);     or just   a;",
    "  if      : if (a >= 7): print(1); else: print(0); end",
    "",
    "A program is run once it is complete; an open if keeps the ... prompt.",
    "Operators: + - * /  and  == != <= >= < >  (comparisons give 1 or 0).",
    "Division truncates toward zero; dividing by 0 reports an error and gives 0.",
    "Variables never assigned read as 0.",
    "",
    "Settings: echo on|off  trace on|off  log on|off",
    "- type 'exit' or 'quit' to leave.",
    "=" * 30 + "\n",
]


command_help = {
    "echo":  "Print effects (Declared / Assigned / Print lines) of each run\n"
             "example: toyl> echo off",
    "trace": "Print the vertical tree of every executed statement\n"
             "example: toyl> trace on",
    "log":   "Debug logging of the interpreter\n"
             "example: toyl> log yes",
    "run":   "Run a source file, output goes to the screen\n"
             "example: toyl> run in.txt",
    "tree":  "Show the tree of each top-level statement without running it\n"
             "example: toyl> tree if (1 < 2): print(1); end",
}

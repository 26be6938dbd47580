from rich.pretty import pprint

from clicraft import *

__prog__ = "kubectl"

app = Application("kubectl", "a tiny cluster client", shell=True, fancy=True, colorful=True)

get = app.new_parent_command("get", "display one or many resources", aliases=["g"], flags=[
    Flag("output", "output format", short="o", default="text", persistent=True),
])


@get.command(aliases=["po"], flags=[Flag("watch", "watch for changes", short="w")])
def pods(flags, arguments):
    """list pods"""
    pprint({"pods": arguments or ["all"], **flags.as_dict()})


app.add_command(get)


@app.command(arguments=ArgumentSpecification.exact(2), flags=[Flag("verbose", short="v")])
def add(flags, arguments):
    """add two numbers"""
    if flags.get("verbose"):
        pprint(arguments)
    print(sum(map(int, arguments)))


@app.command(deprecated="use 'add' instead", arguments=ArgumentSpecification.end_inclusive(1, 3))
def plus(flags, arguments):
    """add up to three numbers"""
    print(sum(map(int, arguments)))


if __name__ == '__main__':
    app.execute()

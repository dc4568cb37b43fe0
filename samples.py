"""Example snippets offered by the GUI and the command line."""

SAMPLES = {
    "Counting loop": """\
// Sum the numbers 0..4
let total = 0;
for (let i = 0; i < 5; i = i + 1) {
  total = total + i;
  i = i + 1;
}
console.log("total:", total);
""",
    "While countdown": """\
let n = 3;
while (n > 0) {
  console.log(n);
  n--;
}
console.log("liftoff");
""",
    "Conditions": """\
let score = 72;
let passed = score >= 50;
if (score > 90) {
  console.log("excellent");
} else if (passed) {
  console.log("passed");
} else {
  console.log("try again");
}
""",
    "Strings and arrays": """\
const name = "Ada";
let greeting = "Hello, " + name;
let items = [3, 1, 2];
console.log(greeting);
console.log(items);
""",
}

DEFAULT_SAMPLE = "Counting loop"
